"""Criterion registry — maps strategy criterion names to typed criteria.

Known criteria carry a default threshold.  Anything else resolves to
``Criterion.UNKNOWN`` so that new criteria can be stored before the
scorer understands them.
"""

from enum import Enum

from folio.signals.models import CallType


class Criterion(str, Enum):
    """Metrics a strategy formula can weigh."""

    PE_RATIO = "pe_ratio"
    PEGY_INDEX = "pegy_index"
    RANGE_52W = "52w_range"
    UNKNOWN = "unknown"

    @classmethod
    def from_name(cls, name: str) -> "Criterion":
        """Resolve a free-form criterion name, falling back to ``UNKNOWN``."""
        key = normalise_name(name)
        for member in cls:
            if member is not cls.UNKNOWN and member.value == key:
                return member
        return cls.UNKNOWN


DEFAULT_THRESHOLDS: dict[Criterion, float] = {
    Criterion.PE_RATIO: 35.0,
    Criterion.PEGY_INDEX: 1.5,
    Criterion.RANGE_52W: 28.0,  # percent of the 52-week band
}

CRITERION_LABELS: dict[Criterion, str] = {
    Criterion.PE_RATIO: "P/E Ratio",
    Criterion.PEGY_INDEX: "PEGY Index",
    Criterion.RANGE_52W: "52-Week Range",
}


def normalise_name(name: str) -> str:
    """Lower-case and trim *name*; the first space becomes an underscore."""
    return name.strip().lower().replace(" ", "_", 1)


def is_favourable(metric: float, threshold: float, call_type: CallType) -> bool:
    """Compare *metric* to *threshold* in the direction *call_type* prefers.

    BUY favours values below the threshold, SELL values above it.
    """
    if call_type is CallType.BUY:
        return metric < threshold
    return metric > threshold


def criterion_label(name: str) -> str:
    """Human label for *name*; unknown names are returned unchanged."""
    return CRITERION_LABELS.get(Criterion.from_name(name), name)


def target_info(name: str, call_type: CallType) -> str:
    """Describe the scoring target of a criterion for a form hint."""
    criterion = Criterion.from_name(name)
    if criterion is Criterion.UNKNOWN:
        return "Pro-rata scoring"

    threshold = DEFAULT_THRESHOLDS[criterion]
    shown = f"{threshold:g}%" if criterion is Criterion.RANGE_52W else f"{threshold:g}"
    if call_type is CallType.BUY:
        return f"Target: <{shown} (lower is better)"
    return f"Target: >{shown} (higher is better)"
