"""Trend classification — moving-average crossover sentiment.

Provides:
- ``classify_trend()``: price vs. MA(20) vs. MA(200) into one of five
  sentiment signals (plus ``NO_DATA``).
- ``call_label()``: the buy/sell wording shown next to a signal.
- ``ma_marker_layout()``: relative placement of price and both averages
  on a single bar.
"""

import math
from dataclasses import dataclass
from typing import Optional

from folio.signals.models import PriceSnapshot, Signal


_CALL_LABELS: dict[Signal, str] = {
    Signal.STRONG_BULLISH: "Strong Buy",
    Signal.BULLISH: "Buy",
    Signal.NEUTRAL: "Neutral",
    Signal.BEARISH: "Sell",
    Signal.STRONG_BEARISH: "Strong Sell",
    Signal.NO_DATA: "Neutral",
}


@dataclass(frozen=True)
class Marker:
    """One value plotted on the MA bar."""

    label: str  # "Current", "20d" or "200d"
    value: float
    position: float  # 0–100 across the min..max span


@dataclass(frozen=True)
class MarkerLayout:
    """Price, MA(20) and MA(200) ordered from lowest to highest."""

    markers: tuple[Marker, Marker, Marker]
    golden_cross: bool  # MA(20) above MA(200)

    @property
    def middle(self) -> Marker:
        return self.markers[1]

    @property
    def span(self) -> tuple[float, float]:
        return self.markers[0].value, self.markers[2].value


def classify_trend(
    price: Optional[float],
    ma20: Optional[float],
    ma200: Optional[float],
) -> Signal:
    """Classify the moving-average regime of an instrument.

    Args:
        price: Last close.
        ma20: 20-day moving average.
        ma200: 200-day moving average.

    Returns:
        ``NO_DATA`` if any input is missing, zero, NaN or infinite,
        otherwise one of the five sentiment signals.

    Rules (``a = price > ma20``, ``b = price > ma200``, ``c = ma20 > ma200``):
        - **Strong Bullish**: a and b and c (golden-cross regime).
        - **Bullish**: a and b, cross not yet confirmed.
        - **Strong Bearish**: none of a, b, c (death-cross regime).
        - **Bearish**: not a and not b, but ma20 still above ma200.
        - **Neutral**: everything else (price between the averages).
    """
    if not (_usable(price) and _usable(ma20) and _usable(ma200)):
        return Signal.NO_DATA
    return regime_from_flags(price > ma20, price > ma200, ma20 > ma200)


def regime_from_flags(
    above_ma20: bool,
    above_ma200: bool,
    ma20_above_ma200: bool,
) -> Signal:
    """Map the three crossover comparisons to a signal.

    Defined for all eight combinations, including the two that no real
    set of prices can produce.
    """
    if above_ma20 and above_ma200:
        return Signal.STRONG_BULLISH if ma20_above_ma200 else Signal.BULLISH
    if not above_ma20 and not above_ma200:
        return Signal.BEARISH if ma20_above_ma200 else Signal.STRONG_BEARISH
    return Signal.NEUTRAL


def classify_snapshot(snapshot: PriceSnapshot) -> Signal:
    """Shortcut for ``classify_trend(last_close, ma20, ma200)``."""
    return classify_trend(snapshot.last_close, snapshot.ma20, snapshot.ma200)


def call_label(signal: Signal) -> str:
    """Return the buy/sell wording for *signal* ("Strong Buy" … "Strong Sell")."""
    return _CALL_LABELS[signal]


def ma_marker_layout(
    price: Optional[float],
    ma20: Optional[float],
    ma200: Optional[float],
) -> Optional[MarkerLayout]:
    """Place price, MA(20) and MA(200) on a shared 0–100 bar.

    The lowest value sits at 0 and the highest at 100.  When all three
    values are equal every marker is placed at 50.  Returns ``None`` if any
    value is missing or non-finite.
    """
    if not all(v is not None and math.isfinite(v) for v in (price, ma20, ma200)):
        return None

    points = sorted(
        [("Current", price), ("20d", ma20), ("200d", ma200)],
        key=lambda p: p[1],
    )
    lo = points[0][1]
    span = points[2][1] - lo

    def _place(value: float) -> float:
        return (value - lo) / span * 100.0 if span > 0 else 50.0

    markers = tuple(Marker(label, value, _place(value)) for label, value in points)
    return MarkerLayout(markers=markers, golden_cross=ma20 > ma200)


def _usable(value: Optional[float]) -> bool:
    # zero counts as missing
    return bool(value) and math.isfinite(value)
