"""Freshness classification — how long ago a data point was refreshed.

Two thresholds are in use: price/recommendation data is stale after
7 days, holding prices after 2.  The threshold is always passed in by the
call site.
"""

import logging
from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional, Union

logger = logging.getLogger("folio")

RECOMMENDATION_STALE_DAYS = 7
HOLDING_STALE_DAYS = 2

DateLike = Union[date, datetime, str]


@dataclass(frozen=True)
class Freshness:
    """Relative age label plus stale flag."""

    label: str
    is_stale: bool


_UNKNOWN = Freshness(label="", is_stale=False)


def classify_freshness(
    last_updated: Optional[DateLike],
    stale_after_days: int = RECOMMENDATION_STALE_DAYS,
    today: Optional[date] = None,
) -> Freshness:
    """Describe how old *last_updated* is.

    Both sides are reduced to calendar days before differencing, so a
    timestamp from earlier today is always "Today".

    Args:
        last_updated: ``date``, ``datetime`` or ISO-8601 string.  ``None``
            (or an unparseable string) yields an empty label, not stale.
        stale_after_days: Data older than this many days is stale.
        today: Reference day (defaults to the local current date).

    Returns:
        ``Freshness`` with label "Today", "1 day ago", "{n} days ago" or
        "Future date".
    """
    day = _to_date(last_updated)
    if day is None:
        return _UNKNOWN

    ref = today if today is not None else date.today()
    diff_days = (ref - day).days

    if diff_days == 0:
        label = "Today"
    elif diff_days == 1:
        label = "1 day ago"
    elif diff_days < 0:
        label = "Future date"
    else:
        label = f"{diff_days} days ago"

    return Freshness(label=label, is_stale=diff_days > stale_after_days)


def _to_date(value: Optional[DateLike]) -> Optional[date]:
    """Normalise *value* to a calendar day, or ``None`` if unknown."""
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    text = value.strip()
    if not text:
        return None
    try:
        # fromisoformat() only accepts a trailing "Z" from Python 3.11 on
        return datetime.fromisoformat(text.replace("Z", "+00:00")).date()
    except ValueError:
        logger.warning("Unparseable last-updated value: %r", value)
        return None
