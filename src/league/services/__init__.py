"""Service layer - valuation, metrics, history and ledger mutations."""

from league.services.history_ledger import HistoryLedger
from league.services.portfolio_service import (
    PortfolioService,
    ProfileCreate,
    HoldingCreate,
    HoldingUpdate,
    MemberUpdate,
)
from league.services.season_service import SeasonService

__all__ = [
    "HistoryLedger",
    "PortfolioService",
    "ProfileCreate",
    "HoldingCreate",
    "HoldingUpdate",
    "MemberUpdate",
    "SeasonService",
]
