"""
Login Indicator - Display Strings.

Default English titles for the risk factors. The host
framework normally supplies a localized lookup; anything
with the same call signature can replace get_string.
"""

from typing import Callable, Dict


StringLookup = Callable[[str], str]


DEFAULT_STRINGS: Dict[str, str] = {
    "eloginspastweek": "Logins in the past week",
    "eavgsessionlength": "Average session length",
    "eloginsperweek": "Logins per week",
    "etimesincelast": "Time since last login",
    "maxrisktitle": "Never logged in",
}


def get_string(key: str) -> str:
    """Look up a display string, marking missing keys as [[key]]."""
    return DEFAULT_STRINGS.get(key, f"[[{key}]]")
