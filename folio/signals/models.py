"""Signal data models — typed representations of instrument snapshots and enums."""

import math
from dataclasses import dataclass
from enum import Enum
from typing import Optional


class CurrencyCode(str, Enum):
    """Currency of an instrument or account (not of the viewing user)."""

    INR = "INR"
    USD = "USD"
    EUR = "EUR"
    GBP = "GBP"


class AssetClass(str, Enum):
    """Asset classes a holding can belong to."""

    STOCK = "STOCK"
    ETF = "ETF"
    BOND = "BOND"
    MUTUAL_FUND = "MUTUAL_FUND"


class CallType(str, Enum):
    """Direction a strategy is scored for."""

    BUY = "BUY"
    SELL = "SELL"


class Signal(str, Enum):
    """Moving-average crossover sentiment."""

    STRONG_BULLISH = "Strong Bullish"
    BULLISH = "Bullish"
    NEUTRAL = "Neutral"
    BEARISH = "Bearish"
    STRONG_BEARISH = "Strong Bearish"
    NO_DATA = "No Data"


class RangeBand(str, Enum):
    """Where a 52-week position sits, for colouring a progress bar."""

    LOW = "low"    # near the 52-week low (attractive)
    MID = "mid"
    HIGH = "high"  # near the 52-week high


class RsiZone(str, Enum):
    """Momentum zone of a 14-day RSI reading."""

    OVERSOLD = "oversold"
    NEUTRAL = "neutral"
    OVERBOUGHT = "overbought"
    NO_DATA = "no_data"


@dataclass(frozen=True)
class PriceSnapshot:
    """Latest price metrics of one instrument.

    Every field is optional: newly listed or inactive instruments often
    arrive with gaps.
    """

    last_close: Optional[float] = None
    low_52w: Optional[float] = None
    high_52w: Optional[float] = None
    ma20: Optional[float] = None
    ma200: Optional[float] = None
    rsi: Optional[float] = None

    @classmethod
    def from_record(cls, record: dict) -> "PriceSnapshot":
        """Build a snapshot from an upstream security record.

        Unknown keys are ignored. Missing, blank or non-numeric values
        (``""``, ``"N/A"``) and NaN or infinity become ``None``.
        """
        return cls(
            last_close=_as_float(record.get("price_last_close")),
            low_52w=_as_float(record.get("price_52w_low")),
            high_52w=_as_float(record.get("price_52w_high")),
            ma20=_as_float(record.get("price_ma_20d")),
            ma200=_as_float(record.get("price_ma_200d")),
            rsi=_as_float(record.get("rsi_index")),
        )


def _as_float(value) -> Optional[float]:
    if value is None or (isinstance(value, str) and not value.strip()):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return number if math.isfinite(number) else None
