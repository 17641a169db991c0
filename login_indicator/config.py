"""
Login Indicator - Configuration.

============================================================
PURPOSE
============================================================
Thresholds and weights for the four login risk factors,
plus the inactivity gap that separates sessions.

============================================================
NAMING
============================================================
Setting names match the host framework's stored settings:
- e_*: expected value (threshold) for a factor
- w_*: weight of a factor in the total risk
- session_length: max gap (seconds) inside one session

============================================================
WEIGHT NORMALIZATION
============================================================
Defaults express weights as fractions (0-1).
Overrides express weights as percentages (0-100) and are
divided by 100 on load. Defaulted weights are never
re-divided.

============================================================
"""

import logging
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import yaml

from .exceptions import ConfigurationError


logger = logging.getLogger(__name__)


WEEK_SECONDS = 7 * 24 * 60 * 60
DAY_SECONDS = 24 * 60 * 60

WEIGHT_PREFIX = "w_"
THRESHOLD_PREFIX = "e_"


# ============================================================
# CONFIGURATION
# ============================================================


@dataclass(frozen=True)
class LoginIndicatorConfig:
    """
    Configuration for the Login Indicator.

    ============================================================
    THRESHOLD RATIONALE
    ============================================================
    Logins past week:
    - 0% risk at 2 or more sessions in the last 7 days

    Average session length:
    - 0% risk at 10 minutes or longer

    Logins per week:
    - 0% risk at 2 or more sessions per active week

    Time since last login:
    - Risk starts growing once a week has passed

    ============================================================
    PRECONDITION
    ============================================================
    Every e_* threshold must be non-zero. The scorer divides by
    them and does not check. See validate_config().

    ============================================================
    """

    e_loginspastweek: float = 2
    w_loginspastweek: float = 0.2

    e_loginsperweek: float = 2
    w_loginsperweek: float = 0.3

    e_avgsessionlength: float = 10 * 60
    w_avgsessionlength: float = 0.1

    e_timesincelast: float = WEEK_SECONDS
    w_timesincelast: float = 0.4

    session_length: float = 60 * 60       # 1 hour between logs ends a session

    @property
    def total_weight(self) -> float:
        """Sum of all four factor weights (the maximal weighted risk)."""
        return (
            self.w_loginspastweek
            + self.w_avgsessionlength
            + self.w_loginsperweek
            + self.w_timesincelast
        )

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_yaml(cls, path: Path) -> "LoginIndicatorConfig":
        """
        Load configuration overrides from a YAML file.

        The file holds a flat mapping of setting names to values,
        with weights given as percentages.
        """
        with open(path, "r") as f:
            data = yaml.safe_load(f)

        if data is None:
            data = {}
        if not isinstance(data, Mapping):
            raise ConfigurationError(
                f"Config file {path} must contain a mapping of settings, "
                f"got {type(data).__name__}"
            )

        return load_config(data)


# ============================================================
# DEFAULTS AND LOADING
# ============================================================


def get_defaults() -> Dict[str, Any]:
    """Return the default settings, weights as fractions."""
    return LoginIndicatorConfig().to_dict()


def get_default_config() -> LoginIndicatorConfig:
    """Get default configuration."""
    return LoginIndicatorConfig()


def load_config(overrides: Optional[Mapping[str, Any]] = None) -> LoginIndicatorConfig:
    """
    Merge setting overrides onto the defaults.

    Args:
        overrides: Stored settings. Weights (w_*) are percentages.
            A missing or None value falls back to the default.
            Numeric strings from a settings store are accepted.

    Returns:
        LoginIndicatorConfig with weights as fractions

    Raises:
        ConfigurationError: If a setting is not numeric
    """
    overrides = overrides or {}
    settings = get_defaults()

    for setting in settings:
        value = overrides.get(setting)
        if value is None:
            continue
        try:
            value = float(value)
        except (TypeError, ValueError) as e:
            raise ConfigurationError(
                f"Setting {setting} must be numeric, got {value!r}", setting
            ) from e
        if setting.startswith(WEIGHT_PREFIX):
            settings[setting] = value / 100
        else:
            settings[setting] = value

    unknown = sorted(set(overrides) - set(settings))
    if unknown:
        logger.warning(f"Ignoring unknown login indicator settings: {', '.join(unknown)}")

    return LoginIndicatorConfig(**settings)


def load_config_file(path: Optional[Path] = None) -> LoginIndicatorConfig:
    """
    Load configuration from file or return defaults.

    Args:
        path: Optional path to YAML config file

    Returns:
        LoginIndicatorConfig instance
    """
    if path and path.exists():
        return LoginIndicatorConfig.from_yaml(path)
    return get_default_config()


# ============================================================
# VALIDATION
# ============================================================


def validate_config(config: LoginIndicatorConfig) -> None:
    """
    Check the preconditions the scorer relies on.

    Callers run this before scoring. The scorer itself never
    validates.

    Raises:
        ConfigurationError: On a non-positive threshold or
            session length, or a negative weight
    """
    for setting, value in config.to_dict().items():
        if setting.startswith(THRESHOLD_PREFIX) and value <= 0:
            raise ConfigurationError(
                f"Threshold {setting} must be positive, got {value}", setting
            )
        if setting.startswith(WEIGHT_PREFIX) and value < 0:
            raise ConfigurationError(
                f"Weight {setting} must not be negative, got {value}", setting
            )

    if config.session_length <= 0:
        raise ConfigurationError(
            f"session_length must be positive, got {config.session_length}",
            "session_length",
        )
