"""SQLAlchemy ORM model definitions."""

from decimal import Decimal

from sqlalchemy import (
    Column,
    String,
    DateTime,
    Integer,
    Text,
    ForeignKey,
    Enum as SqlEnum,
)
from sqlalchemy.types import TypeDecorator

from league.repositories.sqlalchemy.database import Base
from league.domain.models.enums import AssetClass, ActivityType, SnapshotScope


class ExactDecimal(TypeDecorator):
    """Decimal stored as exact text (SQLite NUMERIC round-trips through float)."""

    impl = String
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is None:
            return None
        return str(Decimal(str(value)))

    def process_result_value(self, value, dialect):
        if value is None:
            return None
        return Decimal(value)


class GroupORM(Base):
    """SQLAlchemy model for GroupState (aggregate root)."""

    __tablename__ = "groups"

    group_id = Column(String(36), primary_key=True)
    name = Column(String(255), unique=True, nullable=False)
    leader_id = Column(String(36), nullable=True)
    current_season_id = Column(String(64), nullable=True)
    created_at_est = Column(DateTime, nullable=True)


class MemberORM(Base):
    """SQLAlchemy model for Member."""

    __tablename__ = "members"

    member_id = Column(String(36), primary_key=True)
    group_id = Column(String(36), ForeignKey("groups.group_id"), nullable=False, index=True)
    position = Column(Integer, nullable=False, default=0)
    name = Column(String(255), nullable=False)
    color_hue = Column(Integer, nullable=False, default=0)
    cash_balance = Column(ExactDecimal(), default=Decimal("0"))
    total_realized_pnl = Column(ExactDecimal(), default=Decimal("0"))
    net_deposits = Column(ExactDecimal(), default=Decimal("0"))
    initial_value = Column(ExactDecimal(), nullable=True)
    initial_capital = Column(ExactDecimal(), nullable=True)
    created_at_est = Column(DateTime, nullable=True)


class HoldingORM(Base):
    """SQLAlchemy model for Holding."""

    __tablename__ = "holdings"

    holding_id = Column(String(36), primary_key=True)
    group_id = Column(String(36), ForeignKey("groups.group_id"), nullable=False, index=True)
    member_id = Column(String(36), ForeignKey("members.member_id"), nullable=False)
    position = Column(Integer, nullable=False, default=0)
    symbol = Column(String(20), nullable=False)
    name = Column(String(255), nullable=False)
    asset_class = Column(SqlEnum(AssetClass), nullable=False, default=AssetClass.STOCK)
    quantity = Column(ExactDecimal(), default=Decimal("0"))
    avg_buy_price = Column(ExactDecimal(), default=Decimal("0"))
    current_price = Column(ExactDecimal(), default=Decimal("0"))
    last_price_update_est = Column(DateTime, nullable=True)
    price_lookup_key = Column(String(100), nullable=True)


class ActivityEventORM(Base):
    """SQLAlchemy model for ActivityEvent (append-only log)."""

    __tablename__ = "activity_events"

    event_id = Column(String(36), primary_key=True)
    group_id = Column(String(36), ForeignKey("groups.group_id"), nullable=False, index=True)
    sequence = Column(Integer, nullable=False, default=0)
    timestamp_est = Column(DateTime, nullable=False)
    member_id = Column(String(36), nullable=True)
    event_type = Column(SqlEnum(ActivityType), nullable=False)
    symbol = Column(String(20), nullable=True)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    amount = Column(ExactDecimal(), nullable=True)


class PortfolioSnapshotORM(Base):
    """SQLAlchemy model for PortfolioSnapshot (valuation history)."""

    __tablename__ = "portfolio_snapshots"

    snapshot_id = Column(String(36), primary_key=True)
    group_id = Column(String(36), ForeignKey("groups.group_id"), nullable=False, index=True)
    sequence = Column(Integer, nullable=False, default=0)
    timestamp_est = Column(DateTime, nullable=False)
    entity_id = Column(String(36), nullable=False, index=True)
    scope = Column(SqlEnum(SnapshotScope), nullable=True)
    total_value = Column(ExactDecimal(), nullable=False)
    cost_basis = Column(ExactDecimal(), default=Decimal("0"))


class SeasonORM(Base):
    """SQLAlchemy model for Season."""

    __tablename__ = "seasons"

    group_id = Column(String(36), ForeignKey("groups.group_id"), primary_key=True)
    season_id = Column(String(64), primary_key=True)
    name = Column(String(255), nullable=False)
    start_time_est = Column(DateTime, nullable=False)
    end_time_est = Column(DateTime, nullable=True)
    leader_id = Column(String(36), nullable=False)


class SeasonBaselineORM(Base):
    """SQLAlchemy model for one member's season starting value."""

    __tablename__ = "season_baselines"

    group_id = Column(String(36), ForeignKey("groups.group_id"), primary_key=True)
    season_id = Column(String(64), primary_key=True)
    member_id = Column(String(36), primary_key=True)
    value = Column(ExactDecimal(), nullable=False)
