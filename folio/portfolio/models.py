"""Portfolio data models — holdings and aggregate totals."""

from dataclasses import dataclass
from typing import Optional

from folio.signals.models import AssetClass, CurrencyCode


@dataclass(frozen=True)
class HoldingValuation:
    """A single position valued at its latest known price.

    ``current_price`` may be missing (e.g. a bond without a quote), in
    which case the holding is valued at its average cost.

    Raises:
        ValueError: If quantity or average price is negative.
    """

    quantity: float
    average_price: float
    current_price: Optional[float] = None
    currency: CurrencyCode = CurrencyCode.INR
    asset_class: AssetClass = AssetClass.STOCK

    def __post_init__(self) -> None:
        if self.quantity < 0:
            raise ValueError(f"quantity must be non-negative, got {self.quantity}")
        if self.average_price < 0:
            raise ValueError(
                f"average_price must be non-negative, got {self.average_price}"
            )

    @classmethod
    def from_record(cls, record: dict) -> "HoldingValuation":
        """Build a holding from an upstream holding record."""
        current = record.get("current_price")
        return cls(
            quantity=float(record["quantity"]),
            average_price=float(record["average_price"]),
            current_price=float(current) if current is not None else None,
            currency=CurrencyCode(record.get("currency", CurrencyCode.INR.value)),
            asset_class=AssetClass(record.get("asset_type", AssetClass.STOCK.value)),
        )

    @property
    def invested_value(self) -> float:
        return self.quantity * self.average_price

    @property
    def current_value(self) -> float:
        price = self.current_price if self.current_price is not None else self.average_price
        return self.quantity * price

    @property
    def profit_loss(self) -> float:
        return self.current_value - self.invested_value

    @property
    def profit_loss_pct(self) -> float:
        """P/L relative to invested value; ``0.0`` when nothing is invested."""
        invested = self.invested_value
        if invested <= 0:
            return 0.0
        return (self.profit_loss / invested) * 100.0


@dataclass(frozen=True)
class PortfolioTotals:
    """Summed invested/current values of a selection of holdings."""

    invested: float = 0.0
    current: float = 0.0
    count: int = 0

    @property
    def profit_loss(self) -> float:
        return self.current - self.invested

    @property
    def profit_loss_pct(self) -> float:
        """P/L relative to invested value; ``0.0`` for an unfunded selection."""
        if self.invested <= 0:
            return 0.0
        return (self.profit_loss / self.invested) * 100.0

    def to_dict(self) -> dict:
        return {
            "invested": self.invested,
            "current": self.current,
            "profit_loss": self.profit_loss,
            "profit_loss_pct": self.profit_loss_pct,
            "count": self.count,
        }
