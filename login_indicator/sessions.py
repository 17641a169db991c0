"""
Login Indicator - Session Reconstructor.

============================================================
PURPOSE
============================================================
Turns a time-ordered stream of login events into per-user
session statistics.

============================================================
SESSION RULE
============================================================
A new session starts on a user's first event, or when the
gap since that user's previous event exceeds the configured
session_length. A gap of exactly session_length stays in
the same session.

When a new session starts, the previous one is closed and
its length (last event - session start) recorded. The
final session is never closed, so its length is not
recorded.

============================================================
WEEK BUCKETING
============================================================
Sessions are bucketed by the ISO-8601 week number of their
starting event, in UTC. The key is the week number alone.

============================================================
"""

import logging
from datetime import datetime, timezone
from typing import Dict, Iterable, Optional

from .config import LoginIndicatorConfig, WEEK_SECONDS
from .types import LoginEvent, SessionStats, Timestamp


logger = logging.getLogger(__name__)


def iso_week(timestamp: Timestamp) -> int:
    """ISO-8601 week number (1-53) of a Unix timestamp, in UTC."""
    return datetime.fromtimestamp(timestamp, tz=timezone.utc).isocalendar()[1]


class SessionReconstructor:
    """
    Builds SessionStats for every user seen in an event stream.

    Stateless between calls. Events must already be sorted
    ascending by timestamp; no sorting happens here.
    """

    def __init__(self, config: Optional[LoginIndicatorConfig] = None):
        self._config = config or LoginIndicatorConfig()

    def reconstruct(
        self,
        events: Iterable[LoginEvent],
        end_date: Timestamp,
    ) -> Dict[int, SessionStats]:
        """
        Reconstruct sessions from ordered login events.

        Args:
            events: Login events, ascending by timestamp
            end_date: End of the scoring window (Unix seconds)

        Returns:
            Mapping of user id to SessionStats
        """
        gap = self._config.session_length
        recent_cutoff = end_date - WEEK_SECONDS

        sessions: Dict[int, SessionStats] = {}
        event_count = 0

        for event in events:
            event_count += 1
            stats = sessions.get(event.user_id)

            if stats is None:
                stats = SessionStats()
                sessions[event.user_id] = stats
                is_new_session = True
            else:
                is_new_session = (event.timestamp - gap) > stats.last_login_timestamp

            if is_new_session:
                if stats.current_session_start > 0:
                    stats.session_lengths.append(
                        stats.last_login_timestamp - stats.current_session_start
                    )
                stats.total_sessions += 1
                stats.current_session_start = event.timestamp

                week = iso_week(event.timestamp)
                stats.weekly_login_counts[week] = stats.weekly_login_counts.get(week, 0) + 1

                if event.timestamp > recent_cutoff:
                    stats.recent_week_sessions += 1

            stats.last_login_timestamp = event.timestamp

        logger.debug(
            f"Reconstructed sessions from {event_count} events for {len(sessions)} users"
        )
        return sessions


def reconstruct_sessions(
    events: Iterable[LoginEvent],
    end_date: Timestamp,
    config: Optional[LoginIndicatorConfig] = None,
) -> Dict[int, SessionStats]:
    """
    Convenience function to reconstruct sessions in one call.

    Args:
        events: Login events, ascending by timestamp
        end_date: End of the scoring window (Unix seconds)
        config: Optional configuration (for session_length)

    Returns:
        Mapping of user id to SessionStats
    """
    return SessionReconstructor(config).reconstruct(events, end_date)
