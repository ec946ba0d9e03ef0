"""Group and activity endpoints."""

from fastapi import APIRouter, Depends

from league.api.deps import get_portfolio_service
from league.api.errors import unwrap
from league.api.schemas import (
    ActivityListResponse,
    ActivityResponse,
    ClearActivityResponse,
    GroupCreateRequest,
    GroupListResponse,
    GroupResponse,
    GroupSummaryResponse,
    NoteCreateRequest,
)
from league.services import PortfolioService

router = APIRouter(prefix="/groups", tags=["groups"])


@router.post("", response_model=GroupResponse, status_code=201)
def create_group(
    data: GroupCreateRequest,
    service: PortfolioService = Depends(get_portfolio_service),
) -> GroupResponse:
    """Create a new group."""
    return GroupResponse.from_domain(service.create_group(data.name))


@router.get("", response_model=GroupListResponse)
def list_groups(service: PortfolioService = Depends(get_portfolio_service)) -> GroupListResponse:
    """List all groups."""
    groups = service.list_groups()
    return GroupListResponse(
        groups=[GroupSummaryResponse.from_domain(g) for g in groups],
        count=len(groups),
    )


@router.get("/{group_id}", response_model=GroupResponse)
def get_group(
    group_id: str,
    service: PortfolioService = Depends(get_portfolio_service),
) -> GroupResponse:
    """Get a group with its members, holdings and seasons."""
    return GroupResponse.from_domain(service.get_group(group_id))


@router.get("/{group_id}/activity", response_model=ActivityListResponse)
def list_activity(
    group_id: str,
    service: PortfolioService = Depends(get_portfolio_service),
) -> ActivityListResponse:
    """Get the activity feed, newest first."""
    events = service.get_group(group_id).activity
    return ActivityListResponse(
        events=[ActivityResponse.model_validate(e) for e in events],
        count=len(events),
    )


@router.post("/{group_id}/notes", response_model=ActivityResponse, status_code=201)
def add_note(
    group_id: str,
    data: NoteCreateRequest,
    service: PortfolioService = Depends(get_portfolio_service),
) -> ActivityResponse:
    """Post a note to the activity feed."""
    event = unwrap(service.add_note(
        group_id,
        title=data.title,
        member_id=data.member_id,
        description=data.description,
    ))
    return ActivityResponse.model_validate(event)


@router.delete("/{group_id}/activity", response_model=ClearActivityResponse)
def clear_activity(
    group_id: str,
    service: PortfolioService = Depends(get_portfolio_service),
) -> ClearActivityResponse:
    """Delete the whole activity feed."""
    return ClearActivityResponse(removed=service.clear_activity(group_id))
