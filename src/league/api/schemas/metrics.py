"""Pydantic schemas for metrics, leaderboard and chart endpoints."""

from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel

from league.domain.models import BaselineSource, ChartRange, MetricsMode, SnapshotScope


class UnifiedMetricsResponse(BaseModel):
    """Response schema for a member's mode-aware P&L."""

    model_config = {"from_attributes": True}

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
    has_season_data: bool


class GroupMetricsResponse(BaseModel):
    """Response schema for a group's mode-aware P&L."""

    model_config = {"from_attributes": True}

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
    members: list[UnifiedMetricsResponse]
    has_season_data: bool


class LeaderboardEntryResponse(BaseModel):
    model_config = {"from_attributes": True}

    rank: int
    member_id: str
    name: str
    current_value: Decimal
    cost_basis: Decimal
    baseline: Decimal
    pl_abs: Decimal
    pl_pct: Decimal
    holding_count: int


class TradeRankingResponse(BaseModel):
    model_config = {"from_attributes": True}

    holding_id: str
    member_id: str
    member_name: str
    symbol: str
    unrealized_pl: Decimal
    unrealized_pl_pct: Decimal


class LeaderboardResponse(BaseModel):
    """Response schema for the ranked members plus best/worst open trades."""

    mode: MetricsMode
    mode_label: str
    entries: list[LeaderboardEntryResponse]
    best_trades: list[TradeRankingResponse]
    worst_trades: list[TradeRankingResponse]


class ChartPointResponse(BaseModel):
    model_config = {"from_attributes": True}

    timestamp: datetime
    total_value: Decimal
    cost_basis: Decimal


class ChartResponse(BaseModel):
    """Response schema for a downsampled value series."""

    range: ChartRange
    entity_id: str
    scope: SnapshotScope
    as_of: Optional[datetime] = None
    points: list[ChartPointResponse]
