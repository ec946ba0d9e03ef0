"""Pydantic schemas for group, member, holding and activity payloads."""

from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field

from league.domain.models import ActivityType, AssetClass, GroupState, Season


class GroupCreateRequest(BaseModel):
    """Request schema for creating a group."""

    name: str = Field(..., min_length=1, max_length=255, description="Unique group name")


class MemberResponse(BaseModel):
    """Response schema for a member."""

    model_config = {"from_attributes": True}

    member_id: str
    name: str
    color_hue: int
    cash_balance: Decimal
    total_realized_pnl: Decimal
    net_deposits: Decimal
    initial_value: Optional[Decimal] = None
    initial_capital: Optional[Decimal] = None
    created_at: Optional[datetime] = None


class HoldingResponse(BaseModel):
    """Response schema for a holding."""

    model_config = {"from_attributes": True}

    holding_id: str
    member_id: str
    symbol: str
    name: str
    asset_class: AssetClass
    quantity: Decimal
    avg_buy_price: Decimal
    current_price: Decimal
    last_price_update: Optional[datetime] = None
    price_lookup_key: Optional[str] = None


class ActivityResponse(BaseModel):
    """Response schema for one activity event."""

    model_config = {"from_attributes": True}

    event_id: str
    timestamp: datetime
    event_type: ActivityType
    title: str
    member_id: Optional[str] = None
    symbol: Optional[str] = None
    description: Optional[str] = None
    amount: Optional[Decimal] = None


class ActivityListResponse(BaseModel):
    """Response schema for the activity feed (newest first)."""

    events: list[ActivityResponse]
    count: int


class NoteCreateRequest(BaseModel):
    """Request schema for posting a note."""

    title: str = Field(..., min_length=1, max_length=255)
    member_id: Optional[str] = None
    description: Optional[str] = Field(default=None, max_length=1000)


class ClearActivityResponse(BaseModel):
    removed: int


class SeasonResponse(BaseModel):
    """Response schema for a season."""

    season_id: str
    name: str
    start_time: datetime
    end_time: Optional[datetime] = None
    leader_id: str
    is_active: bool
    member_snapshots: dict[str, Decimal]

    @classmethod
    def from_domain(cls, season: Season) -> "SeasonResponse":
        return cls(
            season_id=season.season_id,
            name=season.name,
            start_time=season.start_time,
            end_time=season.end_time,
            leader_id=season.leader_id,
            is_active=season.is_active,
            member_snapshots=dict(season.member_snapshots),
        )


class GroupSummaryResponse(BaseModel):
    """Response schema for a group in a listing."""

    group_id: str
    name: str
    member_count: int
    leader_id: Optional[str] = None
    current_season_id: Optional[str] = None
    created_at: Optional[datetime] = None

    @classmethod
    def from_domain(cls, group: GroupState) -> "GroupSummaryResponse":
        return cls(
            group_id=group.group_id,
            name=group.name,
            member_count=len(group.members),
            leader_id=group.leader_id,
            current_season_id=group.current_season_id,
            created_at=group.created_at,
        )


class GroupListResponse(BaseModel):
    """Response schema for listing groups."""

    groups: list[GroupSummaryResponse]
    count: int


class GroupResponse(BaseModel):
    """Response schema for a group with its members, holdings and seasons."""

    group_id: str
    name: str
    leader_id: Optional[str] = None
    current_season_id: Optional[str] = None
    created_at: Optional[datetime] = None
    members: list[MemberResponse]
    holdings: list[HoldingResponse]
    seasons: list[SeasonResponse]

    @classmethod
    def from_domain(cls, group: GroupState) -> "GroupResponse":
        return cls(
            group_id=group.group_id,
            name=group.name,
            leader_id=group.leader_id,
            current_season_id=group.current_season_id,
            created_at=group.created_at,
            members=[MemberResponse.model_validate(m) for m in group.members],
            holdings=[HoldingResponse.model_validate(h) for h in group.holdings],
            seasons=[SeasonResponse.from_domain(s) for s in group.seasons],
        )
