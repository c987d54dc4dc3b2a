"""Folio Signals — engine configuration.

Loads .env variables into a typed config object.
Validates values on startup.
"""

import os
from dataclasses import dataclass

from dotenv import load_dotenv

from folio.signals.freshness import HOLDING_STALE_DAYS, RECOMMENDATION_STALE_DAYS
from folio.signals.models import CurrencyCode
from folio.strategy.scorer import DEFAULT_UNKNOWN_CREDIT

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off", ""}


@dataclass(frozen=True)
class Config:
    """Typed configuration loaded from environment variables."""

    reporting_currency: CurrencyCode
    recommendation_stale_days: int
    holding_stale_days: int
    strict_criteria: bool  # reject criteria outside the registry on validate
    unknown_criterion_credit: float
    log_level: str
    api_port: int

    def stale_days_for(self, context: str) -> int:
        """Return the staleness threshold for ``"recommendation"`` or ``"holding"``.

        Raises ``ValueError`` for any other context.
        """
        if context == "recommendation":
            return self.recommendation_stale_days
        if context == "holding":
            return self.holding_stale_days
        raise ValueError(f"Unknown freshness context: {context!r}")


def load_config(env_path: str | None = None) -> Config:
    """Load configuration from environment variables.

    Raises ``ValueError`` with a message naming the offending variable when
    a value cannot be parsed or is out of range.
    """
    load_dotenv(dotenv_path=env_path)

    currency = os.environ.get("REPORTING_CURRENCY", "INR").upper()
    try:
        reporting_currency = CurrencyCode(currency)
    except ValueError:
        raise ValueError(
            f"REPORTING_CURRENCY must be one of "
            f"{', '.join(c.value for c in CurrencyCode)}, got {currency!r}"
        ) from None

    recommendation_days = _int_var("RECOMMENDATION_STALE_DAYS", RECOMMENDATION_STALE_DAYS)
    holding_days = _int_var("HOLDING_STALE_DAYS", HOLDING_STALE_DAYS)
    for name, value in (
        ("RECOMMENDATION_STALE_DAYS", recommendation_days),
        ("HOLDING_STALE_DAYS", holding_days),
    ):
        if value < 0:
            raise ValueError(f"{name} must be non-negative, got {value}")

    credit = _float_var("UNKNOWN_CRITERION_CREDIT", DEFAULT_UNKNOWN_CREDIT)
    if not 0.0 <= credit <= 1.0:
        raise ValueError(f"UNKNOWN_CRITERION_CREDIT must be 0.0–1.0, got {credit}")

    return Config(
        reporting_currency=reporting_currency,
        recommendation_stale_days=recommendation_days,
        holding_stale_days=holding_days,
        strict_criteria=_bool_var("STRICT_CRITERIA", False),
        unknown_criterion_credit=credit,
        log_level=os.environ.get("LOG_LEVEL", "INFO"),
        api_port=_int_var("API_PORT", 8080),
    )


def _int_var(name: str, default: int) -> int:
    raw = os.environ.get(name)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None


def _float_var(name: str, default: float) -> float:
    raw = os.environ.get(name)
    if raw is None:
        return default
    try:
        return float(raw)
    except ValueError:
        raise ValueError(f"{name} must be a number, got {raw!r}") from None


def _bool_var(name: str, default: bool) -> bool:
    raw = os.environ.get(name)
    if raw is None:
        return default
    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise ValueError(f"{name} must be true or false, got {raw!r}")
