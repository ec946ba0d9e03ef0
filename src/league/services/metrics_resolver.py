"""
Baseline and metrics resolver.

Produces one mode-aware P&L figure per member and per group. The baseline for
each mode is resolved by walking an ordered list of resolvers; the first one
that returns a value wins. Each resolver is a plain function of the data it
is given so the order can be tested tier by tier.
"""

import logging
from decimal import Decimal
from typing import Callable, Iterable, Optional, Sequence

from league.core.timezone import to_eastern
from league.domain.models import (
    BaselineSource,
    GroupState,
    Holding,
    Member,
    MetricsMode,
    PortfolioSnapshot,
    Season,
    SnapshotScope,
)
from league.domain.views import (
    GroupUnifiedMetrics,
    LeaderboardEntry,
    MemberMetrics,
    TradeRanking,
    TradeRankings,
    UnifiedMetrics,
)
from league.services.valuation import (
    ZERO,
    HUNDRED,
    member_metrics,
    position_metrics,
)

logger = logging.getLogger(__name__)

ALL_TIME_LABEL = "All Time"

AllTimeResolver = Callable[
    [Member, MemberMetrics, Sequence[PortfolioSnapshot]], Optional[Decimal]
]
SeasonResolver = Callable[
    [Member, MemberMetrics, Season, Sequence[PortfolioSnapshot]], Optional[Decimal]
]


def pl_from_baseline(current_value: Decimal, baseline: Decimal) -> tuple[Decimal, Decimal]:
    """Return (absolute, percent) P&L; the percentage is 0 unless the baseline is positive."""
    pl_abs = current_value - baseline
    pl_pct = pl_abs / baseline * HUNDRED if baseline > ZERO else ZERO
    return pl_abs, pl_pct


def member_snapshots(
    snapshots: Iterable[PortfolioSnapshot],
    member_id: str,
) -> list[PortfolioSnapshot]:
    """Return a member's user-scope snapshots."""
    return [s for s in snapshots if s.belongs_to(member_id, SnapshotScope.USER)]


# =============================================================================
# ALL-TIME BASELINE TIERS
# =============================================================================


def explicit_initial_value(member, metrics, snapshots) -> Optional[Decimal]:
    return member.initial_value


def legacy_initial_capital(member, metrics, snapshots) -> Optional[Decimal]:
    return member.initial_capital


def earliest_snapshot_value(member, metrics, snapshots) -> Optional[Decimal]:
    history = member_snapshots(snapshots, member.member_id)
    if not history:
        return None
    earliest = min(history, key=lambda s: to_eastern(s.timestamp))
    return earliest.total_value


def computed_start_value(member, metrics, snapshots) -> Optional[Decimal]:
    """Cash plus what the current holdings cost: assumes no P&L yet."""
    return metrics.cash_balance + metrics.total_cost_basis


ALL_TIME_BASELINE_CHAIN: tuple[tuple[BaselineSource, AllTimeResolver], ...] = (
    (BaselineSource.INITIAL_VALUE, explicit_initial_value),
    (BaselineSource.INITIAL_CAPITAL, legacy_initial_capital),
    (BaselineSource.EARLIEST_SNAPSHOT, earliest_snapshot_value),
    (BaselineSource.COMPUTED, computed_start_value),
)


# =============================================================================
# SEASON BASELINE TIERS
# =============================================================================


def recorded_season_value(member, metrics, season, snapshots) -> Optional[Decimal]:
    return season.member_snapshots.get(member.member_id)


def nearest_snapshot_to_start(member, metrics, season, snapshots) -> Optional[Decimal]:
    history = member_snapshots(snapshots, member.member_id)
    if not history:
        return None
    start = to_eastern(season.start_time)
    nearest = min(history, key=lambda s: abs(to_eastern(s.timestamp) - start))
    return nearest.total_value


def current_portfolio_value(member, metrics, season, snapshots) -> Optional[Decimal]:
    return metrics.portfolio_value


SEASON_BASELINE_CHAIN: tuple[tuple[BaselineSource, SeasonResolver], ...] = (
    (BaselineSource.SEASON_SNAPSHOT, recorded_season_value),
    (BaselineSource.NEAREST_SNAPSHOT, nearest_snapshot_to_start),
    (BaselineSource.CURRENT_VALUE, current_portfolio_value),
)


def resolve_all_time_baseline(
    member: Member,
    metrics: MemberMetrics,
    snapshots: Sequence[PortfolioSnapshot],
) -> tuple[Decimal, BaselineSource]:
    """Walk the all-time chain and return (baseline, tier that produced it)."""
    for source, resolver in ALL_TIME_BASELINE_CHAIN:
        value = resolver(member, metrics, snapshots)
        if value is not None:
            return value, source
    return metrics.portfolio_value, BaselineSource.CURRENT_VALUE


def resolve_season_baseline(
    member: Member,
    metrics: MemberMetrics,
    season: Season,
    snapshots: Sequence[PortfolioSnapshot],
) -> tuple[Decimal, BaselineSource]:
    """Walk the season chain and return (baseline, tier that produced it)."""
    for source, resolver in SEASON_BASELINE_CHAIN:
        value = resolver(member, metrics, season, snapshots)
        if value is not None:
            return value, source
    return metrics.portfolio_value, BaselineSource.CURRENT_VALUE


# =============================================================================
# UNIFIED METRICS
# =============================================================================


def get_metrics_for_mode(
    member: Member,
    holdings: Iterable[Holding],
    season: Optional[Season],
    mode: MetricsMode,
    snapshots: Optional[Sequence[PortfolioSnapshot]] = None,
) -> UnifiedMetrics:
    """
    Compute a member's P&L against the baseline for the requested mode.

    In season mode without a season the current value is used as the baseline,
    which yields zero P&L and has_season_data=False.
    """
    history = list(snapshots or ())
    metrics = member_metrics(member, holdings)

    if mode == MetricsMode.SEASON:
        if season is not None:
            baseline, source = resolve_season_baseline(member, metrics, season, history)
            label = season.name
        else:
            baseline, source = metrics.portfolio_value, BaselineSource.CURRENT_VALUE
            label = "No Active Season"
    else:
        baseline, source = resolve_all_time_baseline(member, metrics, history)
        label = ALL_TIME_LABEL

    pl_abs, pl_pct = pl_from_baseline(metrics.portfolio_value, baseline)

    return UnifiedMetrics(
        member_id=member.member_id,
        mode=mode,
        mode_label=label,
        current_value=metrics.portfolio_value,
        baseline=baseline,
        baseline_source=source,
        pl_abs=pl_abs,
        pl_pct=pl_pct,
        portfolio_value=metrics.portfolio_value,
        invested_value=metrics.invested_value,
        cash_balance=metrics.cash_balance,
        total_cost_basis=metrics.total_cost_basis,
        unrealized_pl=metrics.unrealized_pl,
        realized_pnl=metrics.realized_pnl,
        has_season_data=mode == MetricsMode.SEASON and season is not None,
    )


def get_group_metrics_for_mode(
    group: GroupState,
    season: Optional[Season],
    mode: MetricsMode,
    snapshots: Optional[Sequence[PortfolioSnapshot]] = None,
) -> GroupUnifiedMetrics:
    """
    Group-level analog of get_metrics_for_mode.

    Current values and baselines are summed separately and the group P&L is
    derived from the two sums; member percentages are never averaged.
    """
    history = group.snapshots if snapshots is None else snapshots
    members = tuple(
        get_metrics_for_mode(m, group.holdings, season, mode, history)
        for m in group.members
    )

    current_value = sum((m.current_value for m in members), ZERO)
    baseline = sum((m.baseline for m in members), ZERO)
    pl_abs, pl_pct = pl_from_baseline(current_value, baseline)

    if mode == MetricsMode.SEASON:
        label = season.name if season is not None else "No Active Season"
    else:
        label = ALL_TIME_LABEL

    return GroupUnifiedMetrics(
        group_id=group.group_id,
        mode=mode,
        mode_label=label,
        current_value=current_value,
        baseline=baseline,
        pl_abs=pl_abs,
        pl_pct=pl_pct,
        member_count=len(members),
        total_cash=sum((m.cash_balance for m in members), ZERO),
        invested_value=sum((m.invested_value for m in members), ZERO),
        members=members,
        has_season_data=mode == MetricsMode.SEASON and season is not None,
    )


# =============================================================================
# RANKINGS
# =============================================================================


def leaderboard(
    group: GroupState,
    mode: MetricsMode = MetricsMode.ALL_TIME,
    season: Optional[Season] = None,
) -> list[LeaderboardEntry]:
    """
    Rank members by P&L percentage for the given mode.

    Season mode uses the group's current season unless one is passed.
    Ties go to the larger absolute P&L, then to the name.
    """
    if mode == MetricsMode.SEASON and season is None:
        season = group.current_season

    rows = []
    for member in group.members:
        metrics = get_metrics_for_mode(member, group.holdings, season, mode, group.snapshots)
        rows.append((member, metrics))

    rows.sort(key=lambda row: (-row[1].pl_pct, -row[1].pl_abs, row[0].name.lower()))

    return [
        LeaderboardEntry(
            rank=index,
            member_id=member.member_id,
            name=member.name,
            current_value=metrics.current_value,
            cost_basis=metrics.total_cost_basis,
            baseline=metrics.baseline,
            pl_abs=metrics.pl_abs,
            pl_pct=metrics.pl_pct,
            holding_count=len(group.holdings_for(member.member_id)),
        )
        for index, (member, metrics) in enumerate(rows, start=1)
    ]


def trade_rankings(group: GroupState, limit: int = 3) -> TradeRankings:
    """Return the best (gaining) and worst (losing) open positions in the group."""
    names = {m.member_id: m.name for m in group.members}
    ranked = []
    for holding in group.holdings:
        position = position_metrics(holding)
        ranked.append(
            TradeRanking(
                holding_id=holding.holding_id,
                member_id=holding.member_id,
                member_name=names.get(holding.member_id, "Unknown"),
                symbol=holding.symbol,
                unrealized_pl=position.unrealized_pl,
                unrealized_pl_pct=position.unrealized_pl_pct,
            )
        )
    ranked.sort(key=lambda r: r.unrealized_pl_pct, reverse=True)

    best = [r for r in ranked if r.unrealized_pl_pct > ZERO][:limit]
    losers = [r for r in ranked if r.unrealized_pl_pct < ZERO]
    worst = list(reversed(losers[-limit:])) if limit > 0 else []
    return TradeRankings(best=tuple(best), worst=tuple(worst))


def season_for(group: GroupState, season_id: Optional[str]) -> Optional[Season]:
    """Return the named season, or the current one when season_id is None."""
    if season_id is None:
        return group.current_season
    season = group.find_season(season_id)
    if season is None:
        logger.warning("Season %s not found in group %s", season_id, group.group_id)
    return season
