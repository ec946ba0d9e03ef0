"""
Pytest configuration and fixtures for portfolio league tests.

This module provides:
- In-memory SQLite database fixtures
- Repository and service fixtures
- Factory helpers for groups, members, holdings and snapshots
- Time helpers for Eastern timezone
- FastAPI test client
"""

import uuid
from datetime import datetime, timedelta
from decimal import Decimal
from typing import Callable, Optional

import pytest
from sqlalchemy import create_engine, StaticPool
from sqlalchemy.orm import sessionmaker, Session
from fastapi.testclient import TestClient

from league.main import app
from league.repositories.sqlalchemy.database import Base, get_db, reset_database
# Import ORM models to register them with Base before creating tables
from league.repositories.sqlalchemy import orm_models  # noqa: F401
from league.repositories.sqlalchemy import SqlAlchemyGroupRepository
from league.services import (
    HistoryLedger,
    HoldingCreate,
    PortfolioService,
    ProfileCreate,
    SeasonService,
)
from league.domain.models import (
    AssetClass,
    GroupState,
    Holding,
    Member,
    PortfolioSnapshot,
    SnapshotScope,
    WithdrawalPolicy,
)
from league.core.timezone import EASTERN_TZ
from league.config.settings import Settings, reset_settings, set_settings


# =============================================================================
# TIMEZONE HELPERS
# =============================================================================


def eastern_datetime(
    year: int,
    month: int,
    day: int,
    hour: int = 10,
    minute: int = 0,
    second: int = 0,
) -> datetime:
    """Create a localized datetime in US/Eastern timezone."""
    return EASTERN_TZ.localize(datetime(year, month, day, hour, minute, second))


@pytest.fixture
def fixed_now() -> datetime:
    """Fixed 'now' timestamp for deterministic tests."""
    return eastern_datetime(2024, 6, 15, 14, 30, 0)


# =============================================================================
# DATABASE FIXTURES
# =============================================================================


@pytest.fixture(scope="function")
def test_engine():
    """Create test database engine with shared in-memory SQLite."""
    # Reset settings for clean state
    reset_settings()

    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def test_session(test_engine) -> Session:
    """Create test database session."""
    TestSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=test_engine)
    session = TestSessionLocal()
    try:
        yield session
    finally:
        session.close()


# =============================================================================
# REPOSITORY FIXTURES
# =============================================================================


@pytest.fixture
def group_repo(test_session) -> SqlAlchemyGroupRepository:
    """Provide test GroupRepository."""
    return SqlAlchemyGroupRepository(test_session)


# =============================================================================
# SERVICE FIXTURES
# =============================================================================


@pytest.fixture
def history_ledger() -> HistoryLedger:
    """Provide an append-only HistoryLedger with the default retention."""
    return HistoryLedger()


@pytest.fixture
def portfolio_service(group_repo, history_ledger) -> PortfolioService:
    """Provide test PortfolioService (clamping withdrawals)."""
    return PortfolioService(
        group_repo=group_repo,
        history=history_ledger,
        withdrawal_policy=WithdrawalPolicy.CLAMP,
    )


@pytest.fixture
def strict_portfolio_service(group_repo, history_ledger) -> PortfolioService:
    """Provide test PortfolioService that rejects over-withdrawals."""
    return PortfolioService(
        group_repo=group_repo,
        history=history_ledger,
        withdrawal_policy=WithdrawalPolicy.REJECT,
    )


@pytest.fixture
def season_service(group_repo) -> SeasonService:
    """Provide test SeasonService."""
    return SeasonService(group_repo=group_repo)


# =============================================================================
# FACTORY FIXTURES
# =============================================================================


@pytest.fixture
def group_factory(portfolio_service) -> Callable[..., GroupState]:
    """Factory for creating persisted test groups."""

    def _create_group(name: Optional[str] = None) -> GroupState:
        if name is None:
            name = f"Test Group {uuid.uuid4().hex[:8]}"
        return portfolio_service.create_group(name)

    return _create_group


@pytest.fixture
def member_factory(portfolio_service) -> Callable[..., Member]:
    """Factory for joining persisted members to a group."""

    def _create_member(
        group_id: str,
        name: Optional[str] = None,
        initial_cash: Decimal = Decimal("1000"),
        holdings: Optional[list[HoldingCreate]] = None,
        at: Optional[datetime] = None,
    ) -> Member:
        if name is None:
            name = f"Investor {uuid.uuid4().hex[:6]}"
        result = portfolio_service.create_profile(
            group_id,
            ProfileCreate(
                name=name,
                initial_cash=initial_cash,
                color_hue=200,
                holdings=holdings or [],
            ),
            at=at,
        )
        assert result.ok, result.message
        return result.value

    return _create_member


# =============================================================================
# PRESET DATA FIXTURES
# =============================================================================


@pytest.fixture
def sample_group(group_factory) -> GroupState:
    """Create an empty sample group."""
    return group_factory(name="Wall Street Bets")


@pytest.fixture
def funded_member(sample_group, member_factory) -> tuple[GroupState, Member]:
    """Create a sample group with one member holding $1,000 cash."""
    member = member_factory(sample_group.group_id, name="Alice", initial_cash=Decimal("1000"))
    return sample_group, member


# =============================================================================
# API TEST CLIENT FIXTURE
# =============================================================================


@pytest.fixture
def client(test_engine) -> TestClient:
    """Provide FastAPI test client with test database."""
    # Startup creates tables on the configured engine; keep it off disk
    set_settings(Settings(database_url="sqlite:///:memory:"))
    reset_database()
    TestSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=test_engine)

    def override_get_db():
        session = TestSessionLocal()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
    reset_database()
    reset_settings()


# =============================================================================
# HELPER FUNCTIONS (exported for use in tests)
# =============================================================================


def assert_decimal_equal(
    actual: Decimal,
    expected: Decimal,
    tolerance: Decimal = Decimal("0.01"),
) -> None:
    """Assert two Decimals are equal within tolerance."""
    diff = abs(Decimal(str(actual)) - expected)
    assert diff <= tolerance, f"Expected {expected}, got {actual} (diff={diff})"


def make_member(
    name: str = "Alice",
    cash: str = "0",
    initial_value: Optional[str] = None,
    initial_capital: Optional[str] = None,
    member_id: Optional[str] = None,
) -> Member:
    """Build an in-memory member."""
    return Member(
        member_id=member_id or f"m-{name.lower()}",
        name=name,
        cash_balance=Decimal(cash),
        initial_value=Decimal(initial_value) if initial_value is not None else None,
        initial_capital=Decimal(initial_capital) if initial_capital is not None else None,
    )


def make_holding(
    member_id: str,
    symbol: str = "AAPL",
    quantity: str = "10",
    avg_buy_price: str = "100",
    current_price: Optional[str] = None,
    holding_id: Optional[str] = None,
) -> Holding:
    """Build an in-memory holding."""
    return Holding(
        holding_id=holding_id or f"h-{uuid.uuid4().hex[:8]}",
        member_id=member_id,
        symbol=symbol,
        name=symbol,
        asset_class=AssetClass.STOCK,
        quantity=Decimal(quantity),
        avg_buy_price=Decimal(avg_buy_price),
        current_price=Decimal(current_price if current_price is not None else avg_buy_price),
    )


def make_snapshot(
    entity_id: str,
    timestamp: datetime,
    total_value: str = "1000",
    scope: Optional[SnapshotScope] = SnapshotScope.USER,
) -> PortfolioSnapshot:
    """Build a snapshot for one entity."""
    return PortfolioSnapshot(
        snapshot_id=f"s-{uuid.uuid4().hex[:8]}",
        timestamp=timestamp,
        entity_id=entity_id,
        total_value=Decimal(total_value),
        cost_basis=Decimal("0"),
        scope=scope,
    )


def hourly_snapshots(
    entity_id: str,
    start: datetime,
    count: int,
    scope: SnapshotScope = SnapshotScope.USER,
) -> list[PortfolioSnapshot]:
    """Build `count` snapshots one hour apart with values 0, 1, 2, ..."""
    return [
        make_snapshot(entity_id, start + timedelta(hours=i), str(i), scope)
        for i in range(count)
    ]


def make_group(
    members: list[Member],
    holdings: Optional[list[Holding]] = None,
    group_id: str = "g-1",
) -> GroupState:
    """Build an in-memory group."""
    return GroupState(
        group_id=group_id,
        name="Test Group",
        members=list(members),
        holdings=list(holdings or []),
    )

