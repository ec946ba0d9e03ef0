"""Dependency injection for FastAPI."""

from fastapi import Depends
from sqlalchemy.orm import Session

from league.config.settings import get_settings
from league.repositories.sqlalchemy.database import get_db
from league.repositories.sqlalchemy import SqlAlchemyGroupRepository
from league.services import HistoryLedger, PortfolioService, SeasonService


def get_group_repo(db: Session = Depends(get_db)) -> SqlAlchemyGroupRepository:
    """Provide GroupRepository instance."""
    return SqlAlchemyGroupRepository(db)


def get_history_ledger() -> HistoryLedger:
    """Provide a HistoryLedger configured from settings."""
    settings = get_settings()
    return HistoryLedger(
        retention_limit=settings.snapshot_retention_limit,
        policy=settings.snapshot_policy,
    )


def get_portfolio_service(
    group_repo: SqlAlchemyGroupRepository = Depends(get_group_repo),
    history: HistoryLedger = Depends(get_history_ledger),
) -> PortfolioService:
    """Provide PortfolioService instance."""
    return PortfolioService(
        group_repo=group_repo,
        history=history,
        withdrawal_policy=get_settings().withdrawal_policy,
    )


def get_season_service(
    group_repo: SqlAlchemyGroupRepository = Depends(get_group_repo),
) -> SeasonService:
    """Provide SeasonService instance."""
    return SeasonService(group_repo=group_repo)
