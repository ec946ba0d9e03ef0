"""Holding domain model."""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Optional

from league.domain.models.enums import AssetClass


def normalize_symbol(symbol: str) -> str:
    """Return a ticker symbol trimmed and uppercased."""
    return symbol.strip().upper()


@dataclass
class Holding:
    """
    A position in one security held by one member.

    Quantity and prices are Decimal; a sale always closes the whole position.
    """

    holding_id: str
    member_id: str
    symbol: str
    name: str
    asset_class: AssetClass = AssetClass.STOCK
    quantity: Decimal = field(default_factory=lambda: Decimal("0"))
    avg_buy_price: Decimal = field(default_factory=lambda: Decimal("0"))
    current_price: Decimal = field(default_factory=lambda: Decimal("0"))
    last_price_update: Optional[datetime] = field(default=None)
    price_lookup_key: Optional[str] = None

    def __post_init__(self) -> None:
        if isinstance(self.asset_class, str):
            self.asset_class = AssetClass(self.asset_class)
        self.symbol = normalize_symbol(self.symbol)

    @property
    def cost_basis(self) -> Decimal:
        """Quantity times average buy price."""
        return (self.quantity or Decimal("0")) * (self.avg_buy_price or Decimal("0"))

    @property
    def market_value(self) -> Decimal:
        """Quantity times current price."""
        return (self.quantity or Decimal("0")) * (self.current_price or Decimal("0"))
