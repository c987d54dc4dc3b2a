"""52-week range positioning and RSI zones — pure math, no I/O.

Maps a price into its trailing 52-week band as a 0–100 position.  A
result of ``0`` is also returned when inputs are missing, non-finite or
the range is degenerate; callers that need to tell "no data" apart from
"at the low" must check the inputs themselves.
"""

import math
from typing import Optional, Sequence

import numpy as np

from folio.signals.models import PriceSnapshot, RangeBand, RsiZone

LOW_BAND_CEILING = 28.0
MID_BAND_CEILING = 55.0

RSI_OVERSOLD_BELOW = 30.0
RSI_OVERBOUGHT_ABOVE = 70.0


def position(
    current: Optional[float],
    low: Optional[float],
    high: Optional[float],
) -> float:
    """Return where *current* sits between *low* and *high* (0–100).

    Formula::

        position = clamp((current - low) / (high - low) × 100, 0, 100)

    Clamping absorbs stale bounds that the live price has since crossed.
    Returns ``0.0`` when any input is ``None``, NaN or infinite, or when
    ``high == low``.
    """
    if not (_finite(current) and _finite(low) and _finite(high)) or high == low:
        return 0.0
    pct = ((current - low) / (high - low)) * 100.0
    return max(0.0, min(100.0, pct))


def position_from_snapshot(snapshot: PriceSnapshot) -> float:
    """Shortcut for ``position(last_close, low_52w, high_52w)``."""
    return position(snapshot.last_close, snapshot.low_52w, snapshot.high_52w)


def range_band(pct: float) -> RangeBand:
    """Bucket a 0–100 position into low / mid / high.

    Below 28 is ``LOW``, below 55 is ``MID``, anything else ``HIGH``.
    """
    if pct < LOW_BAND_CEILING:
        return RangeBand.LOW
    if pct < MID_BAND_CEILING:
        return RangeBand.MID
    return RangeBand.HIGH


def rsi_zone(rsi: Optional[float]) -> RsiZone:
    """Bucket an RSI reading into oversold / neutral / overbought.

    Below 30 is ``OVERSOLD``, above 70 is ``OVERBOUGHT``; both bounds are
    ``NEUTRAL``.  A missing or non-finite reading is ``NO_DATA``.
    """
    if not _finite(rsi):
        return RsiZone.NO_DATA
    if rsi < RSI_OVERSOLD_BELOW:
        return RsiZone.OVERSOLD
    if rsi > RSI_OVERBOUGHT_ABOVE:
        return RsiZone.OVERBOUGHT
    return RsiZone.NEUTRAL


def positions(
    current: Sequence[Optional[float]],
    low: Sequence[Optional[float]],
    high: Sequence[Optional[float]],
) -> np.ndarray:
    """Vectorised :func:`position` for a whole table column.

    The three sequences must have equal length.  ``None``, NaN and
    infinite entries and degenerate ranges produce ``0.0`` for that row,
    matching the scalar function.
    """
    cur = np.array(current, dtype=np.float64)
    lo = np.array(low, dtype=np.float64)
    hi = np.array(high, dtype=np.float64)
    if not (cur.shape == lo.shape == hi.shape):
        raise ValueError(
            f"Column lengths differ: current={cur.shape[0]}, "
            f"low={lo.shape[0]}, high={hi.shape[0]}"
        )

    with np.errstate(invalid="ignore"):
        span = hi - lo
    valid = np.isfinite(cur) & np.isfinite(lo) & np.isfinite(hi) & (span != 0)

    out = np.zeros(cur.shape, dtype=np.float64)
    out[valid] = (cur[valid] - lo[valid]) / span[valid] * 100.0
    return np.clip(out, 0.0, 100.0)


def _finite(value: Optional[float]) -> bool:
    return value is not None and math.isfinite(value)
