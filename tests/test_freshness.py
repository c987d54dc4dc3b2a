"""Tests for freshness (staleness) classification.

Every test pins ``today`` so results do not depend on the clock.
"""

from datetime import date, datetime, timedelta, timezone

import pytest

from folio.signals.freshness import (
    HOLDING_STALE_DAYS,
    RECOMMENDATION_STALE_DAYS,
    Freshness,
    classify_freshness,
)

TODAY = date(2026, 3, 15)


class TestClassifyFreshness:
    """Unit tests for classify_freshness()."""

    @pytest.mark.parametrize("value", [None, "", "   "])
    def test_absent_is_unknown_not_stale(self, value):
        assert classify_freshness(value, today=TODAY) == Freshness("", False)

    @pytest.mark.parametrize("hour, minute", [(0, 0), (9, 30), (23, 59)])
    def test_any_time_today_is_today(self, hour, minute):
        ts = datetime(2026, 3, 15, hour, minute)
        assert classify_freshness(ts, today=TODAY).label == "Today"

    def test_yesterday_late_evening(self):
        """Day granularity: 23:59 yesterday is one day old, not zero."""
        ts = datetime(2026, 3, 14, 23, 59)
        assert classify_freshness(ts, today=TODAY).label == "1 day ago"

    def test_n_days_ago(self):
        result = classify_freshness(TODAY - timedelta(days=5), today=TODAY)
        assert result == Freshness("5 days ago", False)

    def test_future_date(self):
        result = classify_freshness(TODAY + timedelta(days=2), today=TODAY)
        assert result == Freshness("Future date", False)

    def test_eight_days_is_stale_under_seven_day_threshold(self):
        result = classify_freshness(TODAY - timedelta(days=8), today=TODAY)
        assert result.is_stale is True
        assert result.label == "8 days ago"

    def test_exactly_seven_days_is_not_stale(self):
        result = classify_freshness(TODAY - timedelta(days=7), today=TODAY)
        assert result.is_stale is False

    def test_two_days_not_stale_under_seven_day_threshold(self):
        result = classify_freshness(TODAY - timedelta(days=2), today=TODAY)
        assert result.is_stale is False

    def test_holding_threshold(self):
        three_days = TODAY - timedelta(days=3)
        assert classify_freshness(three_days, HOLDING_STALE_DAYS, today=TODAY).is_stale is True
        assert (
            classify_freshness(three_days, RECOMMENDATION_STALE_DAYS, today=TODAY).is_stale
            is False
        )

    def test_iso_strings(self):
        assert classify_freshness("2026-03-15", today=TODAY).label == "Today"
        assert classify_freshness("2026-03-14T18:00:00", today=TODAY).label == "1 day ago"
        assert classify_freshness("2026-03-05T10:00:00Z", today=TODAY).label == "10 days ago"

    def test_aware_datetime_uses_its_own_calendar_day(self):
        ts = datetime(2026, 3, 13, 22, 0, tzinfo=timezone.utc)
        assert classify_freshness(ts, today=TODAY).label == "2 days ago"

    def test_unparseable_string_is_unknown(self, caplog):
        with caplog.at_level("WARNING", logger="folio"):
            result = classify_freshness("not-a-date", today=TODAY)
        assert result == Freshness("", False)
        assert "Unparseable" in caplog.text

    def test_defaults_to_current_date(self):
        assert classify_freshness(date.today()).label == "Today"

    def test_idempotent(self):
        d = TODAY - timedelta(days=9)
        assert classify_freshness(d, today=TODAY) == classify_freshness(d, today=TODAY)
