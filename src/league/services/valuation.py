"""
Valuation engine: position, member and group value/cost/P&L.

Pure functions over a snapshot of members and holdings. Mark-to-market value
is always derived from current prices; realized P&L is read from the member
record, where sales accumulate it, so past sales are never recomputed.

Missing numeric fields count as zero rather than raising.
"""

from decimal import Decimal
from typing import Iterable, Optional

from league.domain.models import GroupState, Holding, Member
from league.domain.views import GroupMetrics, MemberMetrics, PositionMetrics

ZERO = Decimal("0")
HUNDRED = Decimal("100")


def _num(value: Optional[Decimal]) -> Decimal:
    return value if value is not None else ZERO


def safe_pct(numerator: Decimal, denominator: Decimal) -> Decimal:
    """Return numerator / denominator x 100, or 0 when the denominator is 0."""
    if denominator == ZERO:
        return ZERO
    return numerator / denominator * HUNDRED


def position_metrics(holding: Holding) -> PositionMetrics:
    """Compute value, cost basis and unrealized P&L for one holding."""
    quantity = _num(holding.quantity)
    current_value = quantity * _num(holding.current_price)
    cost_basis = quantity * _num(holding.avg_buy_price)
    unrealized_pl = current_value - cost_basis
    return PositionMetrics(
        holding_id=holding.holding_id,
        member_id=holding.member_id,
        symbol=holding.symbol,
        quantity=quantity,
        current_value=current_value,
        cost_basis=cost_basis,
        unrealized_pl=unrealized_pl,
        unrealized_pl_pct=safe_pct(unrealized_pl, cost_basis),
    )


def member_metrics(member: Member, holdings: Iterable[Holding]) -> MemberMetrics:
    """
    Value one member's portfolio.

    holdings may be the whole group's list; only the member's own are counted.
    portfolio_value = cash_balance + invested_value.
    """
    positions = tuple(
        position_metrics(h) for h in holdings if h.member_id == member.member_id
    )
    invested_value = sum((p.current_value for p in positions), ZERO)
    total_cost_basis = sum((p.cost_basis for p in positions), ZERO)
    cash_balance = _num(member.cash_balance)
    unrealized_pl = invested_value - total_cost_basis

    return MemberMetrics(
        member_id=member.member_id,
        cash_balance=cash_balance,
        invested_value=invested_value,
        total_cost_basis=total_cost_basis,
        portfolio_value=cash_balance + invested_value,
        unrealized_pl=unrealized_pl,
        unrealized_pl_pct=safe_pct(unrealized_pl, total_cost_basis),
        realized_pnl=_num(member.total_realized_pnl),
        net_deposits=_num(member.net_deposits),
        positions=positions,
    )


def group_metrics(group: GroupState) -> GroupMetrics:
    """Sum member valuations across the group."""
    members = tuple(member_metrics(m, group.holdings) for m in group.members)

    portfolio_value = sum((m.portfolio_value for m in members), ZERO)
    total_cost_basis = sum((m.total_cost_basis for m in members), ZERO)
    cash_balance = sum((m.cash_balance for m in members), ZERO)
    invested_value = sum((m.invested_value for m in members), ZERO)
    unrealized_pl = invested_value - total_cost_basis

    return GroupMetrics(
        group_id=group.group_id,
        portfolio_value=portfolio_value,
        total_cost_basis=total_cost_basis,
        cash_balance=cash_balance,
        invested_value=invested_value,
        unrealized_pl=unrealized_pl,
        unrealized_pl_pct=safe_pct(unrealized_pl, total_cost_basis),
        members=members,
    )
