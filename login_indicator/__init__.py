"""
Login Indicator - Package.

============================================================
PURPOSE
============================================================
Scores each student's risk of disengaging from an online
course from their login history. One indicator plugin for
an engagement-monitoring framework that aggregates several
indicators' scores.

============================================================
PIPELINE
============================================================
raw login events -> session statistics -> risk scores

1. SESSION RECONSTRUCTION: consecutive logs no more than
   session_length apart form one session
2. RISK SCORING: four weighted factors
   - Logins in the past week
   - Average session length
   - Logins per week
   - Time since last login

Users who never logged in during the window score the sum
of all weights (1.0 with defaults).

============================================================
USAGE
============================================================
    from login_indicator import (
        LoginEvent,
        reconstruct_sessions,
        compute_risks,
        load_config,
    )

    config = load_config({"w_loginspastweek": 50})
    sessions = reconstruct_sessions(events, end_date, config)
    risks = compute_risks(sessions, user_ids, now, config)

    for user_id, result in risks.items():
        print(user_id, result.total_risk)

============================================================
"""

# Types
from .types import (
    LoginEvent,
    SessionStats,
    RiskFactor,
    UserRiskResult,
)

# Exceptions
from .exceptions import (
    LoginIndicatorError,
    ConfigurationError,
    InvalidWindowError,
    RepositoryError,
)

# Configuration
from .config import (
    LoginIndicatorConfig,
    get_defaults,
    get_default_config,
    load_config,
    load_config_file,
    validate_config,
)

# Core
from .sessions import (
    SessionReconstructor,
    reconstruct_sessions,
    iso_week,
)
from .scorer import (
    RiskScorer,
    calculate_risk,
    compute_risks,
)

# Collaborators
from .strings import DEFAULT_STRINGS, get_string
from .clock import ClockProtocol, SystemClock, MockClock
from .repository import (
    LoginEventSource,
    InMemoryLoginEventSource,
    LoginEventRepository,
)
from .database import (
    create_database_engine,
    create_all_tables,
    get_session_factory,
    session_scope,
)

# Facade
from .indicator import LoginIndicator


__all__ = [
    # Types
    "LoginEvent",
    "SessionStats",
    "RiskFactor",
    "UserRiskResult",

    # Exceptions
    "LoginIndicatorError",
    "ConfigurationError",
    "InvalidWindowError",
    "RepositoryError",

    # Configuration
    "LoginIndicatorConfig",
    "get_defaults",
    "get_default_config",
    "load_config",
    "load_config_file",
    "validate_config",

    # Core
    "SessionReconstructor",
    "reconstruct_sessions",
    "iso_week",
    "RiskScorer",
    "calculate_risk",
    "compute_risks",

    # Collaborators
    "DEFAULT_STRINGS",
    "get_string",
    "ClockProtocol",
    "SystemClock",
    "MockClock",
    "LoginEventSource",
    "InMemoryLoginEventSource",
    "LoginEventRepository",
    "create_database_engine",
    "create_all_tables",
    "get_session_factory",
    "session_scope",

    # Facade
    "LoginIndicator",
]


__version__ = "1.0.0"
