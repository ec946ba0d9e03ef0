"""API request/response schemas."""

from league.api.schemas.groups import (
    GroupCreateRequest,
    GroupResponse,
    GroupSummaryResponse,
    GroupListResponse,
    MemberResponse,
    HoldingResponse,
    ActivityResponse,
    ActivityListResponse,
    NoteCreateRequest,
    ClearActivityResponse,
    SeasonResponse,
)
from league.api.schemas.holdings import (
    HoldingCreateRequest,
    HoldingUpdateRequest,
    SellRequest,
    SaleResponse,
    PriceUpdateRequest,
    PriceUpdateResponse,
)
from league.api.schemas.members import (
    ProfileCreateRequest,
    MemberUpdateRequest,
    CashRequest,
    WithdrawalResponse,
)
from league.api.schemas.seasons import SeasonActionRequest, SeasonListResponse
from league.api.schemas.metrics import (
    UnifiedMetricsResponse,
    GroupMetricsResponse,
    LeaderboardEntryResponse,
    TradeRankingResponse,
    LeaderboardResponse,
    ChartPointResponse,
    ChartResponse,
)

__all__ = [
    "GroupCreateRequest",
    "GroupResponse",
    "GroupSummaryResponse",
    "GroupListResponse",
    "MemberResponse",
    "HoldingResponse",
    "ActivityResponse",
    "ActivityListResponse",
    "NoteCreateRequest",
    "ClearActivityResponse",
    "SeasonResponse",
    "HoldingCreateRequest",
    "HoldingUpdateRequest",
    "SellRequest",
    "SaleResponse",
    "PriceUpdateRequest",
    "PriceUpdateResponse",
    "ProfileCreateRequest",
    "MemberUpdateRequest",
    "CashRequest",
    "WithdrawalResponse",
    "SeasonActionRequest",
    "SeasonListResponse",
    "UnifiedMetricsResponse",
    "GroupMetricsResponse",
    "LeaderboardEntryResponse",
    "TradeRankingResponse",
    "LeaderboardResponse",
    "ChartPointResponse",
    "ChartResponse",
]
