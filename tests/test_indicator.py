"""
Tests for the Login Indicator facade.

Tests cover:
- Window handling and event source wiring
- Injected clock
- End-to-end scoring from raw events
"""

import pytest

from login_indicator import (
    InMemoryLoginEventSource,
    InvalidWindowError,
    LoginEvent,
    LoginIndicator,
    MockClock,
    load_config,
)


DAY = 86400
WEEK = 7 * DAY
# Monday 2024-03-04 00:00:00 UTC
WINDOW_START = 1709510400
WINDOW_END = WINDOW_START + 4 * WEEK


# =============================================================
# FIXTURES
# =============================================================

@pytest.fixture
def event_source():
    """Two courses of login history."""
    source = InMemoryLoginEventSource()

    # User 1: regular, long sessions every few days in course 10
    for day in range(0, 28, 3):
        start = WINDOW_START + day * DAY
        for minute in range(0, 20, 5):
            source.add(10, LoginEvent(1, start + minute * 60))

    # User 2: one short visit in the first week only
    source.add(10, LoginEvent(2, WINDOW_START + DAY))

    # User 3 only appears in another course
    source.add(20, LoginEvent(3, WINDOW_START + DAY))

    # Outside the window
    source.add(10, LoginEvent(3, WINDOW_START - DAY))
    return source


@pytest.fixture
def clock():
    return MockClock(WINDOW_END)


@pytest.fixture
def indicator(event_source, clock):
    return LoginIndicator(course_id=10, event_source=event_source, clock=clock)


# =============================================================
# TEST: Raw Data
# =============================================================

class TestGetRawdata:
    """Test fetching events and rebuilding sessions."""

    def test_only_course_users_in_window(self, indicator):
        sessions = indicator.get_rawdata(WINDOW_START, WINDOW_END)

        assert set(sessions) == {1, 2}

    def test_session_stats_for_regular_user(self, indicator):
        stats = indicator.get_rawdata(WINDOW_START, WINDOW_END)[1]

        assert stats.total_sessions == 10
        # Nine completed sessions of 15 minutes, the last one left open
        assert stats.session_lengths == [900] * 9
        assert stats.recent_week_sessions == 2

    def test_invalid_window(self, indicator):
        with pytest.raises(InvalidWindowError) as exc_info:
            indicator.get_rawdata(WINDOW_END, WINDOW_START)

        assert exc_info.value.start_date == WINDOW_END

    def test_empty_window_has_no_sessions(self, indicator):
        assert indicator.get_rawdata(WINDOW_END + DAY, WINDOW_END + 2 * DAY) == {}


# =============================================================
# TEST: Risk For Users
# =============================================================

class TestGetRiskForUsers:
    """Test scoring through the facade."""

    def test_regular_user_low_risk(self, indicator):
        risks = indicator.get_risk_for_users([1], WINDOW_START, WINDOW_END)

        assert risks[1].total_risk == 0

    def test_absent_user_scores_maximum(self, indicator):
        risks = indicator.get_risk_for_users([3], WINDOW_START, WINDOW_END)

        assert risks[3].total_risk == pytest.approx(1.0)
        assert len(risks[3].factors) == 1

    def test_lapsed_user(self, indicator):
        risks = indicator.get_risk_for_users([2], WINDOW_START, WINDOW_END)

        # No recent logins (0.2), no completed session (0.1),
        # 1 login per week (0.15), 27 days away: (27 - 7) / 27 * 0.4
        expected = 0.2 + 0.1 + 0.15 + (20 / 27) * 0.4
        assert risks[2].total_risk == pytest.approx(expected)

    def test_now_read_from_clock(self, indicator, clock):
        before = indicator.get_risk_for_users([1], WINDOW_START, WINDOW_END)[1]
        clock.advance(days=30)
        after = indicator.get_risk_for_users([1], WINDOW_START, WINDOW_END)[1]

        assert before.total_risk == 0
        assert after.total_risk > 0

    def test_explicit_now_overrides_clock(self, indicator):
        risks = indicator.get_risk_for_users(
            [1], WINDOW_START, WINDOW_END, now=WINDOW_END + 60 * DAY,
        )

        assert risks[1].factors[3].local_risk_percent > 0

    def test_config_flows_to_both_components(self, event_source, clock):
        config = load_config({"session_length": 60, "w_loginspastweek": 100})
        indicator = LoginIndicator(10, event_source, config=config, clock=clock)

        sessions = indicator.get_rawdata(WINDOW_START, WINDOW_END)
        assert sessions[1].total_sessions == 40

        risks = indicator.calculate_risks([2], sessions)
        assert risks[2].factors[0].weight_percent == 100

    def test_empty_course_all_users_maximal(self, clock):
        indicator = LoginIndicator(99, InMemoryLoginEventSource(), clock=clock)
        risks = indicator.get_risk_for_users([1, 2], WINDOW_START, WINDOW_END)

        assert [r.total_risk for r in risks.values()] == pytest.approx([1.0, 1.0])


# =============================================================
# TEST: Clocks
# =============================================================

class TestClocks:
    """Test the clocks that supply the scoring time."""

    def test_system_clock_is_default(self):
        import time

        from login_indicator import SystemClock

        before = time.time()
        now = SystemClock().timestamp()
        assert before <= now <= time.time()

        last_login = int(now) - 60
        source = InMemoryLoginEventSource([(10, LoginEvent(1, last_login))])
        indicator = LoginIndicator(10, source)
        risks = indicator.get_risk_for_users([1], last_login - DAY, last_login)

        assert risks[1].factors[3].local_risk_percent == 0

    def test_mock_clock_advances(self):
        clock = MockClock(1000)
        clock.advance(seconds=30, days=1)

        assert clock.timestamp() == 1000 + 30 + DAY
