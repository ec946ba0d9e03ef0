"""View models for service outputs."""

from league.domain.views.metrics import (
    PositionMetrics,
    MemberMetrics,
    GroupMetrics,
    UnifiedMetrics,
    GroupUnifiedMetrics,
    LeaderboardEntry,
    TradeRanking,
    TradeRankings,
    Withdrawal,
    Sale,
)

__all__ = [
    "PositionMetrics",
    "MemberMetrics",
    "GroupMetrics",
    "UnifiedMetrics",
    "GroupUnifiedMetrics",
    "LeaderboardEntry",
    "TradeRanking",
    "TradeRankings",
    "Withdrawal",
    "Sale",
]
