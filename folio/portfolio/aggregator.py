"""Portfolio aggregation — pure math, no I/O.

Sums invested and current values of holdings, optionally restricted to
some asset classes.  No currency conversion happens here: every holding
passed in must already be in one reporting currency.
"""

from typing import Iterable, Optional

from folio.portfolio.models import HoldingValuation, PortfolioTotals
from folio.signals.models import AssetClass, CurrencyCode


def aggregate(
    holdings: Iterable[HoldingValuation],
    include_classes: Optional[Iterable[AssetClass]] = None,
) -> PortfolioTotals:
    """Total the holdings whose asset class is in *include_classes*.

    Formula::

        invested        = Σ quantity × average_price
        current         = Σ quantity × (current_price or average_price)
        profit_loss     = current − invested
        profit_loss_pct = profit_loss / invested × 100   (0 if invested ≤ 0)

    Args:
        holdings: Holdings in a single currency.
        include_classes: Asset classes to sum.  ``None`` means all.

    Returns:
        ``PortfolioTotals``; all zeros for an empty selection.

    Raises:
        ValueError: If the selected holdings mix currencies.
    """
    wanted = frozenset(include_classes) if include_classes is not None else None

    invested = 0.0
    current = 0.0
    count = 0
    currency: Optional[CurrencyCode] = None

    for h in holdings:
        if wanted is not None and h.asset_class not in wanted:
            continue
        currency = _check_currency(currency, h)
        invested += h.invested_value
        current += h.current_value
        count += 1

    return PortfolioTotals(invested=invested, current=current, count=count)


def aggregate_by_class(
    holdings: Iterable[HoldingValuation],
) -> dict[AssetClass, PortfolioTotals]:
    """Per-asset-class totals in one pass.

    Only classes that actually occur in *holdings* appear in the result.

    Raises:
        ValueError: If the holdings mix currencies.
    """
    sums: dict[AssetClass, list] = {}
    currency: Optional[CurrencyCode] = None

    for h in holdings:
        currency = _check_currency(currency, h)
        bucket = sums.setdefault(h.asset_class, [0.0, 0.0, 0])
        bucket[0] += h.invested_value
        bucket[1] += h.current_value
        bucket[2] += 1

    return {
        cls: PortfolioTotals(invested=inv, current=cur, count=n)
        for cls, (inv, cur, n) in sums.items()
    }


def _check_currency(
    seen: Optional[CurrencyCode],
    holding: HoldingValuation,
) -> CurrencyCode:
    if seen is not None and holding.currency != seen:
        raise ValueError(
            f"Cannot aggregate mixed currencies: {seen.value} and "
            f"{holding.currency.value}; convert to one reporting currency first"
        )
    return holding.currency
