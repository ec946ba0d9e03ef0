"""Pydantic schemas for season endpoints."""

from typing import Optional

from pydantic import BaseModel, Field

from league.api.schemas.groups import SeasonResponse


class SeasonActionRequest(BaseModel):
    """Request schema for starting or ending a season."""

    caller_id: str = Field(..., min_length=1, description="Member performing the action")


class SeasonListResponse(BaseModel):
    seasons: list[SeasonResponse]
    current_season_id: Optional[str] = None
