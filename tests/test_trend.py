"""Deterministic tests for moving-average trend classification.

The classifier is total over the eight (price>ma20, price>ma200, ma20>ma200)
combinations; each one is pinned down with concrete prices below.
"""

import math

import pytest

from folio.signals.models import PriceSnapshot, Signal
from folio.signals.trend import (
    call_label,
    classify_snapshot,
    classify_trend,
    ma_marker_layout,
    regime_from_flags,
)


# ── Truth table ──────────────────────────────────────────────────────────
#
# a = price > ma20, b = price > ma200, c = ma20 > ma200

FLAG_TABLE = [
    ((True, True, True), Signal.STRONG_BULLISH),
    ((True, True, False), Signal.BULLISH),
    ((True, False, True), Signal.NEUTRAL),
    ((True, False, False), Signal.NEUTRAL),
    ((False, True, True), Signal.NEUTRAL),
    ((False, True, False), Signal.NEUTRAL),
    ((False, False, True), Signal.BEARISH),
    ((False, False, False), Signal.STRONG_BEARISH),
]

# The six combinations reachable with real prices: (price, ma20, ma200)
PRICE_TABLE = [
    ((120.0, 110.0, 100.0), Signal.STRONG_BULLISH),  # T T T golden cross
    ((120.0, 100.0, 110.0), Signal.BULLISH),          # T T F
    ((105.0, 100.0, 110.0), Signal.NEUTRAL),          # T F F
    ((105.0, 110.0, 100.0), Signal.NEUTRAL),          # F T T
    ((90.0, 110.0, 100.0), Signal.BEARISH),           # F F T
    ((90.0, 100.0, 110.0), Signal.STRONG_BEARISH),    # F F F death cross
]


class TestRegimeFromFlags:
    """All eight boolean combinations."""

    @pytest.mark.parametrize("flags, expected", FLAG_TABLE)
    def test_flag_table(self, flags, expected):
        assert regime_from_flags(*flags) is expected


class TestClassifyTrend:
    """Unit tests for classify_trend()."""

    @pytest.mark.parametrize("inputs, expected", PRICE_TABLE)
    def test_price_table(self, inputs, expected):
        assert classify_trend(*inputs) is expected

    def test_equal_values_fall_through_strictly(self):
        """Ties are not 'above': price == ma20 == ma200 → all False → Strong Bearish."""
        assert classify_trend(100.0, 100.0, 100.0) is Signal.STRONG_BEARISH

    def test_price_above_both_equal_averages(self):
        # a=T, b=T, c=F (ma20 == ma200)
        assert classify_trend(110.0, 100.0, 100.0) is Signal.BULLISH

    def test_price_on_ma20_above_ma200(self):
        # price == ma20 → a=F, b=T, c=T
        assert classify_trend(110.0, 110.0, 100.0) is Signal.NEUTRAL

    def test_price_on_ma200_ma20_below(self):
        # price == ma200 → a=T, b=F, c=F
        assert classify_trend(110.0, 100.0, 110.0) is Signal.NEUTRAL

    @pytest.mark.parametrize(
        "price, ma20, ma200",
        [
            (None, 110.0, 100.0),
            (120.0, None, 100.0),
            (120.0, 110.0, None),
            (0.0, 110.0, 100.0),
            (120.0, 0, 100.0),
            (120.0, 110.0, 0.0),
        ],
    )
    def test_missing_or_zero_is_no_data(self, price, ma20, ma200):
        assert classify_trend(price, ma20, ma200) is Signal.NO_DATA

    @pytest.mark.parametrize(
        "price, ma20, ma200",
        [
            (math.nan, 110.0, 100.0),
            (120.0, math.nan, 100.0),
            (120.0, 110.0, math.nan),
            (math.inf, 110.0, 100.0),
            (120.0, -math.inf, 100.0),
        ],
    )
    def test_non_finite_is_no_data(self, price, ma20, ma200):
        """NaN compares False everywhere and would otherwise read as Strong Bearish."""
        assert classify_trend(price, ma20, ma200) is Signal.NO_DATA

    def test_no_data_regardless_of_other_values(self):
        for price, ma20 in [(1.0, 2.0), (2.0, 1.0), (5.0, 5.0)]:
            assert classify_trend(price, ma20, None) is Signal.NO_DATA

    def test_snapshot_shortcut(self):
        snap = PriceSnapshot(last_close=120.0, ma20=110.0, ma200=100.0)
        assert classify_snapshot(snap) is Signal.STRONG_BULLISH

    def test_idempotent(self):
        assert classify_trend(105.0, 110.0, 100.0) is classify_trend(105.0, 110.0, 100.0)


# ── Labels ───────────────────────────────────────────────────────────────


class TestCallLabel:
    @pytest.mark.parametrize(
        "signal, label",
        [
            (Signal.STRONG_BULLISH, "Strong Buy"),
            (Signal.BULLISH, "Buy"),
            (Signal.NEUTRAL, "Neutral"),
            (Signal.BEARISH, "Sell"),
            (Signal.STRONG_BEARISH, "Strong Sell"),
            (Signal.NO_DATA, "Neutral"),
        ],
    )
    def test_labels(self, signal, label):
        assert call_label(signal) == label


# ── Marker layout ────────────────────────────────────────────────────────


class TestMarkerLayout:
    """Unit tests for ma_marker_layout()."""

    def test_orders_and_places_markers(self):
        layout = ma_marker_layout(105.0, 110.0, 100.0)
        assert [m.label for m in layout.markers] == ["200d", "Current", "20d"]
        assert [m.position for m in layout.markers] == pytest.approx([0.0, 50.0, 100.0])
        assert layout.middle.label == "Current"
        assert layout.span == (100.0, 110.0)
        assert layout.golden_cross is True

    def test_death_cross_flag(self):
        layout = ma_marker_layout(90.0, 100.0, 110.0)
        assert layout.golden_cross is False
        assert layout.middle.label == "20d"

    def test_zero_span_places_everything_in_middle(self):
        layout = ma_marker_layout(100.0, 100.0, 100.0)
        assert all(m.position == 50.0 for m in layout.markers)

    def test_missing_value_returns_none(self):
        assert ma_marker_layout(100.0, None, 90.0) is None

    def test_non_finite_value_returns_none(self):
        assert ma_marker_layout(100.0, math.nan, 90.0) is None
        assert ma_marker_layout(math.inf, 100.0, 90.0) is None
