"""Member domain model."""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Optional


@dataclass
class Member:
    """
    One investor within a group.

    cash_balance is uninvested money; net_deposits is lifetime deposits minus
    withdrawals. initial_value is the explicit all-time baseline fixed at join
    time; initial_capital is the older field some stored profiles still carry.
    """

    member_id: str
    name: str
    color_hue: int = 0
    cash_balance: Decimal = field(default_factory=lambda: Decimal("0"))
    total_realized_pnl: Decimal = field(default_factory=lambda: Decimal("0"))
    net_deposits: Decimal = field(default_factory=lambda: Decimal("0"))
    initial_value: Optional[Decimal] = None
    initial_capital: Optional[Decimal] = None
    created_at: Optional[datetime] = field(default=None)

    def __post_init__(self) -> None:
        self.color_hue = max(0, min(360, int(self.color_hue)))
