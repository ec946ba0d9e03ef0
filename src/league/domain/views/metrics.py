"""View models for valuation and P&L outputs."""

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Optional

from league.domain.models.enums import BaselineSource, MetricsMode, WithdrawalOutcome


def _zero() -> Decimal:
    return Decimal("0")


@dataclass(frozen=True)
class PositionMetrics:
    """Mark-to-market figures for one holding."""

    holding_id: str
    member_id: str
    symbol: str
    quantity: Decimal
    current_value: Decimal
    cost_basis: Decimal
    unrealized_pl: Decimal
    unrealized_pl_pct: Decimal


@dataclass(frozen=True)
class MemberMetrics:
    """Valuation of one member: cash plus marked-to-market holdings."""

    member_id: str
    cash_balance: Decimal = field(default_factory=_zero)
    invested_value: Decimal = field(default_factory=_zero)
    total_cost_basis: Decimal = field(default_factory=_zero)
    portfolio_value: Decimal = field(default_factory=_zero)
    unrealized_pl: Decimal = field(default_factory=_zero)
    unrealized_pl_pct: Decimal = field(default_factory=_zero)
    realized_pnl: Decimal = field(default_factory=_zero)
    net_deposits: Decimal = field(default_factory=_zero)
    positions: tuple[PositionMetrics, ...] = ()


@dataclass(frozen=True)
class GroupMetrics:
    """Sum of member valuations across a group."""

    group_id: str
    portfolio_value: Decimal = field(default_factory=_zero)
    total_cost_basis: Decimal = field(default_factory=_zero)
    cash_balance: Decimal = field(default_factory=_zero)
    invested_value: Decimal = field(default_factory=_zero)
    unrealized_pl: Decimal = field(default_factory=_zero)
    unrealized_pl_pct: Decimal = field(default_factory=_zero)
    members: tuple[MemberMetrics, ...] = ()


@dataclass(frozen=True)
class UnifiedMetrics:
    """
    Mode-aware P&L for one member.

    Every surface that shows a member's performance reads this record, so the
    dashboard, the leaderboard and the member card agree for a given mode.
    """

    member_id: str
    mode: MetricsMode
    mode_label: str
    current_value: Decimal
    baseline: Decimal
    baseline_source: BaselineSource
    pl_abs: Decimal
    pl_pct: Decimal
    portfolio_value: Decimal
    invested_value: Decimal
    cash_balance: Decimal
    total_cost_basis: Decimal
    unrealized_pl: Decimal
    realized_pnl: Decimal
    has_season_data: bool = False


@dataclass(frozen=True)
class GroupUnifiedMetrics:
    """Mode-aware P&L for a whole group, derived from summed values."""

    group_id: str
    mode: MetricsMode
    mode_label: str
    current_value: Decimal
    baseline: Decimal
    pl_abs: Decimal
    pl_pct: Decimal
    member_count: int
    total_cash: Decimal
    invested_value: Decimal
    members: tuple[UnifiedMetrics, ...] = ()
    has_season_data: bool = False


@dataclass(frozen=True)
class LeaderboardEntry:
    """One ranked row of the leaderboard."""

    rank: int
    member_id: str
    name: str
    current_value: Decimal
    cost_basis: Decimal
    baseline: Decimal
    pl_abs: Decimal
    pl_pct: Decimal
    holding_count: int


@dataclass(frozen=True)
class TradeRanking:
    """An open position ranked by unrealized return."""

    holding_id: str
    member_id: str
    member_name: str
    symbol: str
    unrealized_pl: Decimal
    unrealized_pl_pct: Decimal


@dataclass(frozen=True)
class TradeRankings:
    """Best and worst open positions across a group."""

    best: tuple[TradeRanking, ...] = ()
    worst: tuple[TradeRanking, ...] = ()


@dataclass(frozen=True)
class Withdrawal:
    """Result of a withdrawal request."""

    member_id: str
    requested: Decimal
    withdrawn: Decimal
    outcome: WithdrawalOutcome
    cash_balance: Decimal


@dataclass(frozen=True)
class Sale:
    """Result of closing a position."""

    holding_id: str
    member_id: str
    symbol: str
    quantity: Decimal
    sell_price: Decimal
    proceeds: Decimal
    cost_basis: Decimal
    realized_pnl: Decimal
    note: Optional[str] = None


