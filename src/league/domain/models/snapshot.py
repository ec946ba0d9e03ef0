"""Portfolio snapshot domain model."""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal

from league.domain.models.enums import SnapshotScope


@dataclass(frozen=True)
class PortfolioSnapshot:
    """
    Point-in-time valuation of one member (scope USER) or one group (scope GROUP).

    entity_id is the member id for USER snapshots and the group id for GROUP ones.
    """

    snapshot_id: str
    timestamp: datetime
    entity_id: str
    total_value: Decimal
    cost_basis: Decimal = field(default_factory=lambda: Decimal("0"))
    scope: SnapshotScope = SnapshotScope.USER

    def __post_init__(self) -> None:
        if self.scope is None:
            object.__setattr__(self, "scope", SnapshotScope.USER)
        elif isinstance(self.scope, str):
            object.__setattr__(self, "scope", SnapshotScope(self.scope))

    def belongs_to(self, entity_id: str, scope: SnapshotScope) -> bool:
        """Return True if this snapshot is part of the given entity's history."""
        return self.entity_id == entity_id and self.scope == scope
