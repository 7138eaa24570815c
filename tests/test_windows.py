"""Tests for recency windows.

**Feature: fx-journal**
"""

from datetime import datetime, timedelta, timezone

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from fxjournal.analytics import filter_by_window, window_cutoff
from fxjournal.models import Trade

NOW = datetime(2024, 3, 31, 14, 30)


def trade_entered(when: datetime, pair: str = "EUR/USD") -> Trade:
    return Trade(
        pair=pair,
        direction="BUY",
        entry_price=1.1,
        lot_size=0.1,
        entry_time=when,
    )


class TestWindowOrderPreservation:
    """
    **Feature: fx-journal, Property 7: Filtering Preserves Order**

    *For any* trade list and window, the result is an order-preserving
    subsequence and the input is left untouched.
    """

    @given(
        offsets=st.lists(st.integers(min_value=0, max_value=60 * 24 * 60), max_size=30),
        window=st.sampled_from(["today", "week", "month", "all"]),
        policy=st.sampled_from(["rolling", "calendar"]),
    )
    @settings(max_examples=100)
    def test_subsequence(self, offsets: list[int], window: str, policy: str):
        trades = [trade_entered(NOW - timedelta(minutes=m)) for m in offsets]
        snapshot = list(trades)

        result = filter_by_window(trades, window, now=NOW, policy=policy)

        assert trades == snapshot
        iterator = iter(trades)
        assert all(any(r is t for t in iterator) for r in result)

    @given(offsets=st.lists(st.integers(min_value=0, max_value=10**6), max_size=20))
    @settings(max_examples=30)
    def test_all_is_identity(self, offsets: list[int]):
        trades = [trade_entered(NOW - timedelta(minutes=m)) for m in offsets]
        assert filter_by_window(trades, "all", now=NOW) == trades


class TestCutoffs:
    def test_today_starts_at_midnight(self):
        assert window_cutoff("today", NOW) == datetime(2024, 3, 31)

    def test_week_is_seven_days(self):
        for policy in ("rolling", "calendar"):
            assert window_cutoff("week", NOW, policy) == NOW - timedelta(days=7)

    def test_rolling_month_is_thirty_days(self):
        assert window_cutoff("month", NOW, "rolling") == datetime(2024, 3, 1, 14, 30)

    def test_calendar_month_clamps_day(self):
        assert window_cutoff("month", NOW, "calendar") == datetime(2024, 2, 29, 14, 30)

    def test_calendar_month_crosses_year(self):
        assert window_cutoff("month", datetime(2024, 1, 15), "calendar") == datetime(2023, 12, 15)

    def test_all_has_no_cutoff(self):
        assert window_cutoff("all", NOW) is None

    def test_unknown_window(self):
        with pytest.raises(ValueError):
            window_cutoff("year", NOW)

    def test_unknown_policy(self):
        with pytest.raises(ValueError):
            window_cutoff("week", NOW, "fiscal")


class TestPolicies:
    def test_month_policies_differ(self):
        # 30 days back from Mar 31 is Mar 1; one calendar month back is Feb 29
        trade = trade_entered(datetime(2024, 2, 29, 18, 0))
        assert filter_by_window([trade], "month", now=NOW, policy="rolling") == []
        assert filter_by_window([trade], "month", now=NOW, policy="calendar") == [trade]

    def test_today_excludes_yesterday(self):
        late_yesterday = trade_entered(datetime(2024, 3, 30, 23, 59))
        early_today = trade_entered(datetime(2024, 3, 31, 0, 1))
        result = filter_by_window([late_yesterday, early_today], "today", now=NOW)
        assert result == [early_today]

    def test_week_boundary_inclusive(self):
        edge = trade_entered(NOW - timedelta(days=7))
        older = trade_entered(NOW - timedelta(days=7, seconds=1))
        assert filter_by_window([edge, older], "week", now=NOW) == [edge]

    def test_aware_timestamps_are_compared_in_local_time(self):
        now = datetime.now()
        aware = trade_entered(datetime.now(timezone.utc) - timedelta(hours=1))
        assert filter_by_window([aware], "week", now=now) == [aware]
