"""
Login Indicator - Clock.

============================================================
RESPONSIBILITY
============================================================
Supplies "now" to the indicator facade.

- The risk scorer never reads wall-clock time itself
- The facade asks its clock when no time is passed in
- Tests swap in MockClock for deterministic scoring

============================================================
"""

from abc import ABC, abstractmethod
from typing import Optional
import threading
import time


# ============================================================
# CLOCK PROTOCOL
# ============================================================

class ClockProtocol(ABC):
    """Abstract interface for the indicator clock."""

    @abstractmethod
    def timestamp(self) -> float:
        """Get current Unix timestamp."""
        pass


# ============================================================
# SYSTEM CLOCK (PRODUCTION)
# ============================================================

class SystemClock(ClockProtocol):
    """Production clock using actual system time."""

    def timestamp(self) -> float:
        return time.time()


# ============================================================
# MOCK CLOCK (TESTING)
# ============================================================

class MockClock(ClockProtocol):
    """
    Mock clock for testing.

    Holds a fixed Unix timestamp that only moves when told to.
    """

    def __init__(self, initial_timestamp: Optional[float] = None):
        """
        Initialize mock clock.

        Args:
            initial_timestamp: Starting Unix time (defaults to current time)
        """
        self._timestamp = time.time() if initial_timestamp is None else initial_timestamp
        self._lock = threading.Lock()

    def timestamp(self) -> float:
        with self._lock:
            return self._timestamp

    def advance(self, seconds: float = 0, days: float = 0) -> None:
        """Advance time by the given number of seconds and days."""
        with self._lock:
            self._timestamp += seconds + days * 24 * 60 * 60
