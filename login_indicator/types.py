"""
Login Indicator - Type Definitions.

============================================================
PURPOSE
============================================================
Data contracts for the Login Indicator.

Defines the records that flow through the indicator:
raw login events in, per-user session statistics in the
middle, per-user risk results out.

============================================================
DESIGN PRINCIPLES
============================================================
- Input events are immutable
- Session statistics are built fresh per scoring run
- Risk factors are purely presentational
- Timestamps are Unix seconds throughout

============================================================
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Union


Timestamp = Union[int, float]


# ============================================================
# INPUT DATA CONTRACTS
# ============================================================


@dataclass(frozen=True)
class LoginEvent:
    """
    A single login log record for one user in one course.

    Supplied by the log store, ascending by timestamp.
    """

    user_id: int
    timestamp: Timestamp


# ============================================================
# SESSION STATISTICS
# ============================================================


@dataclass
class SessionStats:
    """
    Session statistics for one user over a scoring window.

    Only users with at least one event in the window get an
    entry. The session still open at the end of the window
    never contributes a length.
    """

    total_sessions: int = 0

    # ISO week number -> sessions started in that week
    weekly_login_counts: Dict[int, int] = field(default_factory=dict)

    # Completed-session durations (seconds), in order
    session_lengths: List[Timestamp] = field(default_factory=list)

    # Sessions started within the last 7 days of the window
    recent_week_sessions: int = 0

    last_login_timestamp: Timestamp = 0
    current_session_start: Timestamp = 0

    @property
    def average_session_length(self) -> float:
        """Mean completed-session length, 0 when none completed."""
        if not self.session_lengths:
            return 0
        return sum(self.session_lengths) / len(self.session_lengths)

    @property
    def average_weekly_logins(self) -> float:
        """Mean sessions per active week, 0 when no weeks."""
        if not self.weekly_login_counts:
            return 0
        return sum(self.weekly_login_counts.values()) / len(self.weekly_login_counts)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "total_sessions": self.total_sessions,
            "weekly_login_counts": dict(self.weekly_login_counts),
            "session_lengths": list(self.session_lengths),
            "recent_week_sessions": self.recent_week_sessions,
            "last_login_timestamp": self.last_login_timestamp,
            "current_session_start": self.current_session_start,
        }


# ============================================================
# OUTPUT TYPES
# ============================================================


@dataclass(frozen=True)
class RiskFactor:
    """
    Diagnostic breakdown of one factor's share of a user's risk.

    Percentages are integers truncated toward zero.
    """

    title: str
    weight_percent: int
    local_risk_percent: int
    contribution_percent: int
    explanation: str

    def to_dict(self) -> Dict[str, str]:
        """Render in the display form used by engagement reports."""
        return {
            "title": self.title,
            "weighting": f"{self.weight_percent}%",
            "localrisk": f"{self.local_risk_percent}%",
            "logic": self.explanation,
            "riskcontribution": f"{self.contribution_percent}%",
        }


@dataclass(frozen=True)
class UserRiskResult:
    """Total risk for one user plus the factors that produced it."""

    total_risk: float
    factors: List[RiskFactor] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "risk": self.total_risk,
            "info": [factor.to_dict() for factor in self.factors],
        }
