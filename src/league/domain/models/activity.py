"""Activity log domain model."""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Optional

from league.domain.models.enums import ActivityType


@dataclass(frozen=True)
class ActivityEvent:
    """
    Immutable record of one state change in a group.

    member_id is None for group-wide events. amount is signed: realized P&L
    for sells, cash flow for deposits, withdrawals and buys.
    """

    event_id: str
    timestamp: datetime
    event_type: ActivityType
    title: str
    member_id: Optional[str] = None
    symbol: Optional[str] = None
    description: Optional[str] = None
    amount: Optional[Decimal] = None

    def __post_init__(self) -> None:
        if isinstance(self.event_type, str):
            object.__setattr__(self, "event_type", ActivityType(self.event_type))
