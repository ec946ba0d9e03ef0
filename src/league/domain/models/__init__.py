"""Domain models package."""

from league.domain.models.enums import (
    AssetClass,
    ActivityType,
    SnapshotScope,
    SnapshotPolicy,
    WithdrawalPolicy,
    WithdrawalOutcome,
    MetricsMode,
    BaselineSource,
    ChartRange,
)
from league.domain.models.holding import Holding, normalize_symbol
from league.domain.models.member import Member
from league.domain.models.activity import ActivityEvent
from league.domain.models.snapshot import PortfolioSnapshot
from league.domain.models.season import Season, SeasonBaselines
from league.domain.models.group import GroupState

__all__ = [
    "AssetClass",
    "ActivityType",
    "SnapshotScope",
    "SnapshotPolicy",
    "WithdrawalPolicy",
    "WithdrawalOutcome",
    "MetricsMode",
    "BaselineSource",
    "ChartRange",
    "Holding",
    "normalize_symbol",
    "Member",
    "ActivityEvent",
    "PortfolioSnapshot",
    "Season",
    "SeasonBaselines",
    "GroupState",
]
