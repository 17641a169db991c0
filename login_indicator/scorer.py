"""
Login Indicator - Risk Scorer.

============================================================
PURPOSE
============================================================
Turns per-user session statistics into a weighted
disengagement risk score with a per-factor breakdown.

============================================================
SCORING
============================================================
Users with no session statistics never logged in during
the window: their risk is the sum of all four weights.

Everyone else is scored on four independent factors:
1. Logins in the past week
2. Average session length
3. Logins per week
4. Time since last login

Each factor:
    local_risk   = calculate_risk(actual, expected)
    contribution = local_risk * weight
Total risk = sum of contributions.

Local risk is not capped at 1.0. A factor whose actual
value is far below its threshold contributes more than
its weight.

============================================================
"""

import logging
from typing import Dict, Iterable, Mapping, Optional, Union

from .config import DAY_SECONDS, LoginIndicatorConfig
from .strings import StringLookup, get_string as default_get_string
from .types import RiskFactor, SessionStats, Timestamp, UserRiskResult


logger = logging.getLogger(__name__)


NEVER_LOGGED_IN_LOGIC = (
    "This user has never logged into the course and so is at the maximum 100% risk."
)


def calculate_risk(actual: float, expected: float) -> float:
    """
    Local risk of an actual value against its expected value.

    Zero once actual reaches expected, otherwise the shortfall
    as a fraction of expected. expected must be non-zero when
    actual < expected.
    """
    risk = 0
    if actual < expected:
        risk += (expected - actual) / expected
    return risk


def _percent(fraction: float) -> int:
    """Integer percentage, truncated toward zero."""
    return int(fraction * 100)


def _format_number(value: Union[int, float]) -> str:
    """Render a setting for display with at most 14 significant digits."""
    if isinstance(value, float):
        return f"{value:.14g}"
    return str(value)


class RiskScorer:
    """
    Scores users from their session statistics.

    Pure function of its inputs: the current time is passed in,
    never read here.
    """

    def __init__(
        self,
        config: Optional[LoginIndicatorConfig] = None,
        get_string: Optional[StringLookup] = None,
    ):
        """
        Args:
            config: Thresholds and weights. Uses defaults if not provided.
            get_string: Display string lookup for factor titles.
        """
        self._config = config or LoginIndicatorConfig()
        self._get_string = get_string or default_get_string

    def compute_risks(
        self,
        sessions: Mapping[int, SessionStats],
        user_ids: Iterable[int],
        now: Timestamp,
    ) -> Dict[int, UserRiskResult]:
        """
        Score every requested user.

        Args:
            sessions: Session statistics keyed on user id
            user_ids: Users to score, in output order
            now: Current Unix time

        Returns:
            UserRiskResult keyed on user id
        """
        titles = {
            key: self._get_string(key)
            for key in (
                "eloginspastweek",
                "eavgsessionlength",
                "eloginsperweek",
                "etimesincelast",
                "maxrisktitle",
            )
        }

        risks: Dict[int, UserRiskResult] = {}
        never_logged_in = 0

        for user_id in user_ids:
            stats = sessions.get(user_id)
            if stats is None:
                risks[user_id] = self._never_logged_in(titles["maxrisktitle"])
                never_logged_in += 1
            else:
                risks[user_id] = self._score_user(stats, now, titles)
            logger.debug(f"User {user_id} login risk: {risks[user_id].total_risk:.4f}")

        logger.info(
            f"Scored login risk for {len(risks)} users "
            f"({never_logged_in} never logged in)"
        )
        return risks

    # =========================================================
    # NEVER LOGGED IN
    # =========================================================

    def _never_logged_in(self, title: str) -> UserRiskResult:
        factor = RiskFactor(
            title=title,
            weight_percent=100,
            local_risk_percent=100,
            contribution_percent=100,
            explanation=NEVER_LOGGED_IN_LOGIC,
        )
        return UserRiskResult(total_risk=1.0 * self._config.total_weight, factors=[factor])

    # =========================================================
    # FOUR-FACTOR SCORE
    # =========================================================

    def _score_user(
        self,
        stats: SessionStats,
        now: Timestamp,
        titles: Dict[str, str],
    ) -> UserRiskResult:
        """
        Score one user on the four factors.

        The time-since-last factor passes the threshold e_timesincelast
        as the actual value and the elapsed time now - last_login_timestamp
        as the expected value. Local risk is therefore
        (elapsed - e_timesincelast) / elapsed once elapsed exceeds the
        threshold, and 0 before that.
        """
        config = self._config

        factors = [
            self._factor(
                titles["eloginspastweek"],
                stats.recent_week_sessions,
                config.e_loginspastweek,
                config.w_loginspastweek,
                f"0% risk for more than {_format_number(config.e_loginspastweek)} logins a week. "
                f"100% for 0 logins in the past week.",
            ),
            self._factor(
                titles["eavgsessionlength"],
                stats.average_session_length,
                config.e_avgsessionlength,
                config.w_avgsessionlength,
                f"0% risk for average session length longer than "
                f"{_format_number(config.e_avgsessionlength)} seconds. 100% for session length of 0.",
            ),
            self._factor(
                titles["eloginsperweek"],
                stats.average_weekly_logins,
                config.e_loginsperweek,
                config.w_loginsperweek,
                f"0% risk for logging in to the course >= {_format_number(config.e_loginsperweek)} "
                f"times a week. 100% risk for 0 logins a week.",
            ),
            # Threshold in the actual slot: risk grows once elapsed time passes it.
            self._factor(
                titles["etimesincelast"],
                config.e_timesincelast,
                now - stats.last_login_timestamp,
                config.w_timesincelast,
                f"0% risk for last login to the course having just happened. "
                f"Scaling to the max 100% risk after "
                f"{_format_number(config.e_timesincelast / DAY_SECONDS)} days.",
            ),
        ]

        total_risk = sum(contribution for _, contribution in factors)
        return UserRiskResult(
            total_risk=total_risk,
            factors=[factor for factor, _ in factors],
        )

    @staticmethod
    def _factor(
        title: str,
        actual: float,
        expected: float,
        weight: float,
        explanation: str,
    ):
        local_risk = calculate_risk(actual, expected)
        contribution = local_risk * weight
        factor = RiskFactor(
            title=title,
            weight_percent=_percent(weight),
            local_risk_percent=_percent(local_risk),
            contribution_percent=_percent(contribution),
            explanation=explanation,
        )
        return factor, contribution


# ============================================================
# CONVENIENCE FUNCTIONS
# ============================================================


def compute_risks(
    sessions: Mapping[int, SessionStats],
    user_ids: Iterable[int],
    now: Timestamp,
    config: Optional[LoginIndicatorConfig] = None,
    get_string: Optional[StringLookup] = None,
) -> Dict[int, UserRiskResult]:
    """
    Convenience function to score users in one call.

    Args:
        sessions: Session statistics keyed on user id
        user_ids: Users to score
        now: Current Unix time
        config: Optional configuration
        get_string: Optional display string lookup

    Returns:
        UserRiskResult keyed on user id
    """
    return RiskScorer(config, get_string).compute_risks(sessions, user_ids, now)
