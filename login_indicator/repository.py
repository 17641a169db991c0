"""
Login Indicator - Log Repository.

============================================================
PURPOSE
============================================================
Fetches a course's login events for a scoring window.

Every event source returns events ascending by time, so
the session reconstructor can consume them directly.

============================================================
SOURCES
============================================================
- LoginEventRepository: the course log table (SQLAlchemy)
- InMemoryLoginEventSource: a fixed list of events

============================================================
"""

import logging
from abc import ABC, abstractmethod
from typing import Dict, Iterable, List, Tuple

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from .exceptions import RepositoryError
from .models import LogEntry
from .types import LoginEvent, Timestamp


logger = logging.getLogger(__name__)


# ============================================================
# EVENT SOURCE INTERFACE
# ============================================================


class LoginEventSource(ABC):
    """Anything that can supply a course's login events for a window."""

    @abstractmethod
    def fetch_login_events(
        self,
        course_id: int,
        start_date: Timestamp,
        end_date: Timestamp,
    ) -> List[LoginEvent]:
        """Return events with start_date <= timestamp <= end_date, ascending."""
        pass


# ============================================================
# IN-MEMORY SOURCE
# ============================================================


class InMemoryLoginEventSource(LoginEventSource):
    """
    Event source backed by a list, keyed on course.

    Used for replaying exported logs and in tests.
    """

    def __init__(self, events: Iterable[Tuple[int, LoginEvent]] = ()):
        """
        Args:
            events: (course_id, event) pairs
        """
        self._events: Dict[int, List[LoginEvent]] = {}
        for course_id, event in events:
            self.add(course_id, event)

    def add(self, course_id: int, event: LoginEvent) -> None:
        self._events.setdefault(course_id, []).append(event)

    def fetch_login_events(
        self,
        course_id: int,
        start_date: Timestamp,
        end_date: Timestamp,
    ) -> List[LoginEvent]:
        in_window = [
            event for event in self._events.get(course_id, [])
            if start_date <= event.timestamp <= end_date
        ]
        # Stable: ties keep insertion order
        return sorted(in_window, key=lambda event: event.timestamp)


# ============================================================
# DATABASE SOURCE
# ============================================================


class LoginEventRepository(LoginEventSource):
    """
    Repository for reading login events from the log table.
    """

    def __init__(self, session: Session):
        """
        Initialize repository with database session.

        Args:
            session: SQLAlchemy session, owned by the caller
        """
        self._session = session

    def fetch_login_events(
        self,
        course_id: int,
        start_date: Timestamp,
        end_date: Timestamp,
    ) -> List[LoginEvent]:
        """
        Get all login events for a course within a window.

        Args:
            course_id: Course to read
            start_date: Window start, inclusive (Unix seconds)
            end_date: Window end, inclusive (Unix seconds)

        Returns:
            LoginEvents ascending by timestamp

        Raises:
            RepositoryError: If the query fails
        """
        stmt = (
            select(LogEntry.userid, LogEntry.time)
            .where(
                LogEntry.course == course_id,
                LogEntry.time >= start_date,
                LogEntry.time <= end_date,
            )
            .order_by(LogEntry.time.asc(), LogEntry.id.asc())
        )

        try:
            rows = self._session.execute(stmt).all()
        except SQLAlchemyError as e:
            logger.error(f"Failed to fetch login events for course {course_id}: {e}")
            raise RepositoryError(f"Failed to fetch login events: {e}") from e

        logger.debug(f"Fetched {len(rows)} log rows for course {course_id}")
        return [LoginEvent(user_id=row.userid, timestamp=row.time) for row in rows]
