"""
Login Indicator - Exceptions.

============================================================
CUSTOM EXCEPTIONS
============================================================

All exceptions inherit from LoginIndicatorError.

The session reconstructor and risk scorer raise none of
these. They are raised by the surrounding layers only:
configuration validation, the indicator facade and the
log repository.

============================================================
"""


class LoginIndicatorError(Exception):
    """Base exception for the Login Indicator module."""
    pass


class ConfigurationError(LoginIndicatorError):
    """Raised when configuration is invalid."""
    def __init__(self, message: str, setting: str = ""):
        self.setting = setting
        super().__init__(message)


class InvalidWindowError(LoginIndicatorError):
    """Raised when a scoring window ends before it starts."""
    def __init__(self, start_date: int, end_date: int):
        self.start_date = start_date
        self.end_date = end_date
        super().__init__(
            f"Invalid scoring window: start {start_date} is after end {end_date}"
        )


class RepositoryError(LoginIndicatorError):
    """Raised when login events cannot be fetched from the log store."""
    pass
