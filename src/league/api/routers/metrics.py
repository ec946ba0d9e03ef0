"""Metrics, leaderboard and chart endpoints."""

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from league.api.deps import get_portfolio_service
from league.api.schemas import (
    ChartPointResponse,
    ChartResponse,
    GroupMetricsResponse,
    LeaderboardEntryResponse,
    LeaderboardResponse,
    TradeRankingResponse,
    UnifiedMetricsResponse,
)
from league.core.timezone import now_eastern, parse_datetime_eastern
from league.domain.models import ChartRange, GroupState, MetricsMode, Season, SnapshotScope
from league.services import PortfolioService
from league.services.history_ledger import aggregate_for_chart
from league.services.metrics_resolver import (
    get_group_metrics_for_mode,
    get_metrics_for_mode,
    leaderboard,
    season_for,
    trade_rankings,
)

router = APIRouter(prefix="/groups/{group_id}", tags=["metrics"])


def _season(group: GroupState, season_id: Optional[str]) -> Optional[Season]:
    season = season_for(group, season_id)
    if season_id is not None and season is None:
        raise HTTPException(status_code=404, detail=f"Season not found: {season_id}")
    return season


@router.get("/metrics", response_model=GroupMetricsResponse)
def get_group_metrics(
    group_id: str,
    mode: MetricsMode = Query(MetricsMode.ALL_TIME),
    season_id: Optional[str] = Query(None, description="Past season to measure (current if empty)"),
    service: PortfolioService = Depends(get_portfolio_service),
) -> GroupMetricsResponse:
    """Get group P&L for the requested mode."""
    group = service.get_group(group_id)
    metrics = get_group_metrics_for_mode(group, _season(group, season_id), mode)
    return GroupMetricsResponse.model_validate(metrics)


@router.get("/members/{member_id}/metrics", response_model=UnifiedMetricsResponse)
def get_member_metrics(
    group_id: str,
    member_id: str,
    mode: MetricsMode = Query(MetricsMode.ALL_TIME),
    season_id: Optional[str] = Query(None),
    service: PortfolioService = Depends(get_portfolio_service),
) -> UnifiedMetricsResponse:
    """Get one member's P&L for the requested mode."""
    group = service.get_group(group_id)
    member = group.find_member(member_id)
    if member is None:
        raise HTTPException(status_code=404, detail=f"Member not found: {member_id}")
    metrics = get_metrics_for_mode(
        member,
        group.holdings,
        _season(group, season_id),
        mode,
        group.snapshots,
    )
    return UnifiedMetricsResponse.model_validate(metrics)


@router.get("/leaderboard", response_model=LeaderboardResponse)
def get_leaderboard(
    group_id: str,
    mode: MetricsMode = Query(MetricsMode.ALL_TIME),
    service: PortfolioService = Depends(get_portfolio_service),
) -> LeaderboardResponse:
    """Rank members by P&L percentage and list the best and worst open trades."""
    group = service.get_group(group_id)
    season = group.current_season
    label = "All Time"
    if mode == MetricsMode.SEASON:
        label = season.name if season else "No Active Season"
    trades = trade_rankings(group)
    return LeaderboardResponse(
        mode=mode,
        mode_label=label,
        entries=[LeaderboardEntryResponse.model_validate(e) for e in leaderboard(group, mode, season)],
        best_trades=[TradeRankingResponse.model_validate(t) for t in trades.best],
        worst_trades=[TradeRankingResponse.model_validate(t) for t in trades.worst],
    )


@router.get("/chart", response_model=ChartResponse)
def get_chart(
    group_id: str,
    chart_range: ChartRange = Query(ChartRange.ONE_MONTH, alias="range"),
    entity_id: Optional[str] = Query(None, description="Member id (group rollup if empty)"),
    as_of: Optional[str] = Query(None, description="End of the window, ISO 8601 (defaults to now); later points are excluded"),
    service: PortfolioService = Depends(get_portfolio_service),
) -> ChartResponse:
    """Get a downsampled value series for a member or the whole group."""
    group = service.get_group(group_id)
    if entity_id is None or entity_id == group.group_id:
        entity_id, scope = group.group_id, SnapshotScope.GROUP
    else:
        scope = SnapshotScope.USER

    try:
        end = parse_datetime_eastern(as_of) if as_of else now_eastern()
    except (ValueError, OverflowError):
        raise HTTPException(status_code=400, detail=f"Invalid as_of timestamp: {as_of}")

    points = aggregate_for_chart(group.snapshots, chart_range, entity_id, scope, now=end)
    return ChartResponse(
        range=chart_range,
        entity_id=entity_id,
        scope=scope,
        as_of=end,
        points=[ChartPointResponse.model_validate(p) for p in points],
    )
