"""
Login Indicator - Indicator Facade.

============================================================
PURPOSE
============================================================
The object the engagement-monitoring framework drives for
one course.

It orchestrates:
1. Fetching login events for the window
2. Session reconstruction
3. Risk scoring

============================================================
DEPENDENCIES
============================================================
Everything is passed in: course id, event source, config,
string lookup and clock. Nothing is read from shared
framework state.

============================================================
USAGE
============================================================
    from login_indicator import LoginIndicator, LoginEventRepository

    with session_scope(factory) as session:
        indicator = LoginIndicator(
            course_id=42,
            event_source=LoginEventRepository(session),
            config=load_config(stored_settings),
        )
        risks = indicator.get_risk_for_users([3, 7, 9], start, end)

============================================================
"""

import logging
from typing import Dict, Iterable, Optional

from .clock import ClockProtocol, SystemClock
from .config import LoginIndicatorConfig
from .exceptions import InvalidWindowError
from .repository import LoginEventSource
from .scorer import RiskScorer
from .sessions import SessionReconstructor
from .strings import StringLookup
from .types import SessionStats, Timestamp, UserRiskResult


logger = logging.getLogger(__name__)


class LoginIndicator:
    """
    Login-based disengagement indicator for one course.

    Stateless between calls apart from its injected
    collaborators.
    """

    def __init__(
        self,
        course_id: int,
        event_source: LoginEventSource,
        config: Optional[LoginIndicatorConfig] = None,
        get_string: Optional[StringLookup] = None,
        clock: Optional[ClockProtocol] = None,
    ):
        """
        Args:
            course_id: Course whose logs are read
            event_source: Supplies ordered login events
            config: Thresholds and weights. Uses defaults if not provided.
            get_string: Display string lookup for factor titles
            clock: Source of "now" when none is passed in
        """
        self.course_id = course_id
        self.config = config or LoginIndicatorConfig()
        self._event_source = event_source
        self._clock = clock or SystemClock()
        self._reconstructor = SessionReconstructor(self.config)
        self._scorer = RiskScorer(self.config, get_string)

    def get_rawdata(
        self,
        start_date: Timestamp,
        end_date: Timestamp,
    ) -> Dict[int, SessionStats]:
        """
        Fetch the window's login events and rebuild sessions.

        Raises:
            InvalidWindowError: If start_date is after end_date
        """
        if start_date > end_date:
            raise InvalidWindowError(start_date, end_date)

        events = self._event_source.fetch_login_events(self.course_id, start_date, end_date)
        return self._reconstructor.reconstruct(events, end_date)

    def calculate_risks(
        self,
        user_ids: Iterable[int],
        sessions: Dict[int, SessionStats],
        now: Optional[Timestamp] = None,
    ) -> Dict[int, UserRiskResult]:
        """Score users from already reconstructed sessions."""
        if now is None:
            now = self._clock.timestamp()
        return self._scorer.compute_risks(sessions, user_ids, now)

    def get_risk_for_users(
        self,
        user_ids: Iterable[int],
        start_date: Timestamp,
        end_date: Timestamp,
        now: Optional[Timestamp] = None,
    ) -> Dict[int, UserRiskResult]:
        """
        Score users over a window in one call.

        Args:
            user_ids: Users to score
            start_date: Window start (Unix seconds)
            end_date: Window end (Unix seconds)
            now: Current Unix time. Read from the clock if not provided.

        Returns:
            UserRiskResult keyed on user id
        """
        logger.info(
            f"Calculating login risk for course {self.course_id} "
            f"over window {start_date}-{end_date}"
        )
        sessions = self.get_rawdata(start_date, end_date)
        return self.calculate_risks(user_ids, sessions, now)
