"""Domain layer - pure business models with no external dependencies."""

from league.domain.models import (
    Holding,
    Member,
    ActivityEvent,
    PortfolioSnapshot,
    Season,
    SeasonBaselines,
    GroupState,
    AssetClass,
    ActivityType,
    SnapshotScope,
    MetricsMode,
    ChartRange,
)

__all__ = [
    "Holding",
    "Member",
    "ActivityEvent",
    "PortfolioSnapshot",
    "Season",
    "SeasonBaselines",
    "GroupState",
    "AssetClass",
    "ActivityType",
    "SnapshotScope",
    "MetricsMode",
    "ChartRange",
]
