"""Strategy scoring — validate and evaluate weighted multi-criterion formulas.

A strategy is a call type (BUY/SELL) plus an ordered list of
``(criterion_name, weight)`` pairs.  Validation never raises: problems
come back as ``ValidationError`` records so a form can show them inline.
Evaluation compares each metric against its default threshold and sums
``weight × favourable`` into a composite score in [0, 1].
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Mapping, Optional

from folio.signals.models import CallType
from folio.strategy.criteria import (
    DEFAULT_THRESHOLDS,
    Criterion,
    is_favourable,
    normalise_name,
)

logger = logging.getLogger("folio")

WEIGHT_SUM_TOLERANCE = 0.01
DEFAULT_UNKNOWN_CREDIT = 0.5


@dataclass(frozen=True)
class FormulaCriterion:
    """One weighted term of a strategy formula."""

    criterion_name: str
    weight: float


@dataclass(frozen=True)
class StrategyDefinition:
    """Call type plus ordered formula.  Not validated on construction."""

    call_type: CallType
    formula: tuple[FormulaCriterion, ...]

    @classmethod
    def from_record(cls, record: dict) -> StrategyDefinition:
        """Build a definition from an upstream strategy record.

        Accepts ``criteria_name`` (REST field) or ``criterion_name``.
        Raises ``ValueError`` for an unknown call type or a non-numeric weight.
        """
        call_type = CallType(str(record["call_type"]).upper())
        formula = tuple(
            FormulaCriterion(
                criterion_name=str(
                    item.get("criteria_name", item.get("criterion_name", ""))
                ),
                weight=float(item.get("weight", 0)),
            )
            for item in record.get("formula", [])
        )
        return cls(call_type=call_type, formula=formula)


class ValidationErrorKind(str, Enum):
    EMPTY_CRITERION_NAME = "EmptyCriterionName"
    WEIGHT_OUT_OF_RANGE = "WeightOutOfRange"
    WEIGHT_SUM_MISMATCH = "WeightSumMismatch"
    UNKNOWN_CRITERION = "UnknownCriterion"


@dataclass(frozen=True)
class ValidationError:
    """A field-identified rejection of a strategy definition."""

    kind: ValidationErrorKind
    field: str  # e.g. "formula[1].weight" or "formula"
    message: str


@dataclass(frozen=True)
class CriterionResult:
    """Outcome of one formula term."""

    criterion_name: str
    criterion: Criterion
    weight: float
    metric: Optional[float]
    threshold: Optional[float]
    favourable: Optional[bool]  # None for unknown criteria
    contribution: float


@dataclass(frozen=True)
class StrategyScore:
    """Composite suitability score and per-criterion breakdown."""

    score: float
    results: tuple[CriterionResult, ...]

    @property
    def confidence(self) -> float:
        """Score expressed as 0–100."""
        return round(self.score * 100.0, 2)

    @property
    def passed(self) -> tuple[str, ...]:
        """Names of the criteria that were favourable."""
        return tuple(r.criterion_name for r in self.results if r.favourable)


# ── Validation ───────────────────────────────────────────────────────────


def validate(
    definition: StrategyDefinition,
    strict: bool = False,
) -> list[ValidationError]:
    """Check the formula invariants.

    - every criterion has a non-empty name;
    - each weight is within [0, 1];
    - the weights sum to 1.0 within ``WEIGHT_SUM_TOLERANCE``.

    With *strict*, names outside the criterion registry are rejected too.

    Returns:
        An empty list when the definition is valid.
    """
    errors: list[ValidationError] = []

    for i, item in enumerate(definition.formula):
        if not item.criterion_name.strip():
            errors.append(ValidationError(
                kind=ValidationErrorKind.EMPTY_CRITERION_NAME,
                field=f"formula[{i}].criterion_name",
                message="All criteria must have a name",
            ))
        elif strict and Criterion.from_name(item.criterion_name) is Criterion.UNKNOWN:
            errors.append(ValidationError(
                kind=ValidationErrorKind.UNKNOWN_CRITERION,
                field=f"formula[{i}].criterion_name",
                message=f"Unknown criterion '{item.criterion_name}'",
            ))

        if not 0.0 <= item.weight <= 1.0:
            errors.append(ValidationError(
                kind=ValidationErrorKind.WEIGHT_OUT_OF_RANGE,
                field=f"formula[{i}].weight",
                message="Each weight must be between 0 and 1",
            ))

    total = sum(item.weight for item in definition.formula)
    if abs(total - 1.0) > WEIGHT_SUM_TOLERANCE:
        errors.append(ValidationError(
            kind=ValidationErrorKind.WEIGHT_SUM_MISMATCH,
            field="formula",
            message=f"Total weight must equal 1.0 (currently {total:.2f})",
        ))

    return errors


# ── Evaluation ───────────────────────────────────────────────────────────


def evaluate(
    definition: StrategyDefinition,
    metrics: Mapping[str, Optional[float]],
    unknown_credit: float = DEFAULT_UNKNOWN_CREDIT,
    thresholds: Optional[Mapping[Criterion, float]] = None,
) -> StrategyScore:
    """Score *metrics* against *definition*.

    Args:
        definition: Strategy to apply.  Not re-validated here.
        metrics: Metric values keyed by criterion name (``"pe_ratio"``,
            ``"pegy_index"``, ``"52w_range"``).  Missing or ``None`` values
            count as unfavourable.
        unknown_credit: Fraction of its weight an unknown criterion earns
            (pro-rata scoring).  ``0.5`` is neutral, ``0`` makes unknown
            criteria count against the instrument.
        thresholds: Overrides for ``DEFAULT_THRESHOLDS``.

    Returns:
        ``StrategyScore`` whose ``score`` is the sum of contributions.
    """
    if not 0.0 <= unknown_credit <= 1.0:
        raise ValueError(f"unknown_credit must be within [0, 1], got {unknown_credit}")

    limits = dict(DEFAULT_THRESHOLDS)
    if thresholds:
        limits.update(thresholds)
    lookup = {normalise_name(k): v for k, v in metrics.items()}

    results: list[CriterionResult] = []
    for item in definition.formula:
        criterion = Criterion.from_name(item.criterion_name)
        metric = lookup.get(normalise_name(item.criterion_name))

        if criterion is Criterion.UNKNOWN:
            logger.debug(
                "Criterion '%s' not in registry — pro-rata credit %.2f",
                item.criterion_name, unknown_credit,
            )
            results.append(CriterionResult(
                criterion_name=item.criterion_name,
                criterion=criterion,
                weight=item.weight,
                metric=metric,
                threshold=None,
                favourable=None,
                contribution=item.weight * unknown_credit,
            ))
            continue

        threshold = limits[criterion]
        favourable = metric is not None and is_favourable(
            metric, threshold, definition.call_type,
        )
        results.append(CriterionResult(
            criterion_name=item.criterion_name,
            criterion=criterion,
            weight=item.weight,
            metric=metric,
            threshold=threshold,
            favourable=favourable,
            contribution=item.weight if favourable else 0.0,
        ))

    score = sum(r.contribution for r in results)
    return StrategyScore(score=score, results=tuple(results))


def confidence_band(confidence: float) -> str:
    """Bucket a 0–100 confidence: ``high`` ≥ 80, ``medium`` ≥ 60, else ``low``."""
    if confidence >= 80:
        return "high"
    if confidence >= 60:
        return "medium"
    return "low"
