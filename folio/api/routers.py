"""Internal API routers — /signals, /strategy, /portfolio, /format endpoints.

No business logic. Parses request bodies into engine records and
delegates to the pure functions in ``folio.signals``, ``folio.strategy``,
``folio.portfolio`` and ``folio.display``.
"""

import logging
import math
from typing import Optional

from fastapi import APIRouter, HTTPException

from folio.config import Config
from folio.display.currency import (
    format_currency,
    format_percentage,
    profit_loss_tone,
)
from folio.portfolio.aggregator import aggregate, aggregate_by_class
from folio.portfolio.models import HoldingValuation
from folio.signals.freshness import (
    HOLDING_STALE_DAYS,
    RECOMMENDATION_STALE_DAYS,
    classify_freshness,
)
from folio.signals.models import AssetClass, CurrencyCode, RsiZone
from folio.signals.range_position import position, range_band, rsi_zone
from folio.signals.trend import call_label, classify_trend, ma_marker_layout
from folio.strategy.criteria import target_info
from folio.strategy.scorer import (
    DEFAULT_UNKNOWN_CREDIT,
    StrategyDefinition,
    confidence_band,
    evaluate,
    validate,
)

logger = logging.getLogger("folio")
router = APIRouter()

_config: Optional[Config] = None  # Set via configure_routers()

_DEFAULT_STALE_DAYS: dict[str, int] = {
    "recommendation": RECOMMENDATION_STALE_DAYS,
    "holding": HOLDING_STALE_DAYS,
}


def configure_routers(config: Optional[Config] = None) -> None:
    """Inject the engine configuration from application startup.

    Passing ``None`` restores the built-in defaults.
    """
    global _config  # noqa: PLW0603
    _config = config


# ── Helpers ──────────────────────────────────────────────────────────────


def _reject(errors: list[str]) -> HTTPException:
    logger.info("Rejected request: %s", "; ".join(errors))
    return HTTPException(status_code=422, detail={"status": "error", "errors": errors})


def _optional_number(body: dict, key: str) -> Optional[float]:
    value = body.get(key)
    if value is None:
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        raise _reject([f"{key} must be a number"]) from None


def _strategy_from_body(body: dict) -> StrategyDefinition:
    try:
        return StrategyDefinition.from_record(body)
    except KeyError as exc:
        raise _reject([f"missing field {exc.args[0]}"]) from None
    except (AttributeError, TypeError, ValueError) as exc:
        raise _reject([str(exc)]) from None


# ── Signals ──────────────────────────────────────────────────────────────


@router.post("/signals/range")
async def post_range(body: dict):
    """Return the 52-week position and its colour band."""
    current = _optional_number(body, "current")
    low = _optional_number(body, "low")
    high = _optional_number(body, "high")
    has_data = (
        all(v is not None and math.isfinite(v) for v in (current, low, high))
        and high != low
    )
    pct = position(current, low, high)
    return {
        "position": pct,
        "band": range_band(pct).value if has_data else None,
        "has_data": has_data,
    }


@router.post("/signals/trend")
async def post_trend(body: dict):
    """Return the MA crossover signal, its call label and the marker layout."""
    price = _optional_number(body, "price")
    ma20 = _optional_number(body, "ma20")
    ma200 = _optional_number(body, "ma200")
    signal = classify_trend(price, ma20, ma200)

    layout = ma_marker_layout(price, ma20, ma200)
    layout_data = None
    if layout is not None:
        layout_data = {
            "markers": [
                {"label": m.label, "value": m.value, "position": m.position}
                for m in layout.markers
            ],
            "middle": layout.middle.label,
            "golden_cross": layout.golden_cross,
        }

    return {"signal": signal.value, "label": call_label(signal), "layout": layout_data}


@router.post("/signals/rsi")
async def post_rsi(body: dict):
    """Return the momentum zone of a 14-day RSI reading."""
    rsi = _optional_number(body, "rsi")
    zone = rsi_zone(rsi)
    return {"rsi": rsi if zone is not RsiZone.NO_DATA else None, "zone": zone.value}


@router.post("/signals/freshness")
async def post_freshness(body: dict):
    """Return the relative age label and stale flag of ``last_updated``."""
    context = str(body.get("context", "recommendation"))
    if _config is not None:
        try:
            threshold = _config.stale_days_for(context)
        except ValueError as exc:
            raise _reject([str(exc)]) from None
    elif context in _DEFAULT_STALE_DAYS:
        threshold = _DEFAULT_STALE_DAYS[context]
    else:
        raise _reject([f"Unknown freshness context: {context!r}"])

    result = classify_freshness(body.get("last_updated"), stale_after_days=threshold)
    return {"label": result.label, "is_stale": result.is_stale}


# ── Strategy ─────────────────────────────────────────────────────────────


@router.post("/strategy/validate")
async def post_strategy_validate(body: dict):
    """Validate a strategy formula; errors are returned for inline display."""
    definition = _strategy_from_body(body)
    strict = _config.strict_criteria if _config is not None else False
    errors = validate(definition, strict=strict)
    if errors:
        return {
            "status": "error",
            "errors": [
                {"kind": e.kind.value, "field": e.field, "message": e.message}
                for e in errors
            ],
        }
    return {
        "status": "ok",
        "errors": [],
        "targets": [
            target_info(item.criterion_name, definition.call_type)
            for item in definition.formula
        ],
    }


@router.post("/strategy/evaluate")
async def post_strategy_evaluate(body: dict):
    """Score ``metrics`` against a strategy definition."""
    definition = _strategy_from_body(body)
    metrics = body.get("metrics") or {}
    if not isinstance(metrics, dict):
        raise _reject(["metrics must be an object"])
    try:
        metrics = {k: float(v) if v is not None else None for k, v in metrics.items()}
    except (TypeError, ValueError):
        raise _reject(["metric values must be numbers"]) from None

    credit = (
        _config.unknown_criterion_credit if _config is not None else DEFAULT_UNKNOWN_CREDIT
    )
    result = evaluate(definition, metrics, unknown_credit=credit)
    return {
        "score": result.score,
        "confidence": result.confidence,
        "band": confidence_band(result.confidence),
        "results": [
            {
                "criterion_name": r.criterion_name,
                "weight": r.weight,
                "metric": r.metric,
                "threshold": r.threshold,
                "favourable": r.favourable,
                "contribution": r.contribution,
            }
            for r in result.results
        ],
    }


# ── Portfolio ────────────────────────────────────────────────────────────


@router.post("/portfolio/aggregate")
async def post_portfolio_aggregate(body: dict):
    """Total the holdings, optionally filtered to some asset classes.

    The totals, the per-class breakdown and the reporting currency all
    cover the same filtered selection.
    """
    try:
        holdings = [HoldingValuation.from_record(h) for h in body.get("holdings", [])]
        classes = body.get("include_classes")
        if classes is not None:
            include = {AssetClass(c) for c in classes}
            holdings = [h for h in holdings if h.asset_class in include]
        totals = aggregate(holdings)
        by_class = aggregate_by_class(holdings)
    except KeyError as exc:
        raise _reject([f"holding missing field {exc.args[0]}"]) from None
    except (AttributeError, TypeError, ValueError) as exc:
        raise _reject([str(exc)]) from None

    if holdings:
        currency = holdings[0].currency
    elif _config is not None:
        currency = _config.reporting_currency
    else:
        currency = CurrencyCode.INR

    return {
        **totals.to_dict(),
        "currency": currency.value,
        "formatted": {
            "invested": format_currency(totals.invested, currency),
            "current": format_currency(totals.current, currency),
            "profit_loss": format_currency(totals.profit_loss, currency),
            "profit_loss_pct": format_percentage(totals.profit_loss_pct),
        },
        "tone": profit_loss_tone(totals.profit_loss),
        "by_class": {cls.value: t.to_dict() for cls, t in by_class.items()},
    }


# ── Formatting ───────────────────────────────────────────────────────────


@router.post("/format/currency")
async def post_format_currency(body: dict):
    """Render an amount in the grouping convention of its currency."""
    amount = _optional_number(body, "amount")
    if amount is None:
        raise _reject(["amount is required"])
    currency = body.get("currency")
    if not currency:
        raise _reject(["currency is required"])
    return {"formatted": format_currency(amount, currency)}
