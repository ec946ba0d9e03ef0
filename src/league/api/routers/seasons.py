"""Season endpoints."""

from fastapi import APIRouter, Depends

from league.api.deps import get_season_service
from league.api.errors import unwrap
from league.api.schemas import SeasonActionRequest, SeasonListResponse, SeasonResponse
from league.services import SeasonService

router = APIRouter(prefix="/groups/{group_id}/seasons", tags=["seasons"])


@router.get("", response_model=SeasonListResponse)
def list_seasons(
    group_id: str,
    service: SeasonService = Depends(get_season_service),
) -> SeasonListResponse:
    """List every season, oldest first."""
    seasons = service.list_seasons(group_id)
    current = next((s for s in seasons if s.is_active), None)
    return SeasonListResponse(
        seasons=[SeasonResponse.from_domain(s) for s in seasons],
        current_season_id=current.season_id if current else None,
    )


@router.post("/start", response_model=SeasonResponse, status_code=201)
def start_season(
    group_id: str,
    data: SeasonActionRequest,
    service: SeasonService = Depends(get_season_service),
) -> SeasonResponse:
    """Start a season (group leader only)."""
    season = unwrap(service.start_season(group_id, data.caller_id))
    return SeasonResponse.from_domain(season)


@router.post("/end", response_model=SeasonResponse)
def end_season(
    group_id: str,
    data: SeasonActionRequest,
    service: SeasonService = Depends(get_season_service),
) -> SeasonResponse:
    """End the active season (group leader only)."""
    season = unwrap(service.end_season(group_id, data.caller_id))
    return SeasonResponse.from_domain(season)
