"""Pydantic schemas for member and cash endpoints."""

from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field

from league.api.schemas.holdings import HoldingCreateRequest
from league.domain.models import WithdrawalOutcome


class ProfileCreateRequest(BaseModel):
    """Request schema for joining a group."""

    name: str = Field(..., min_length=1, max_length=100)
    initial_cash: Decimal = Field(default=Decimal("0"), ge=0)
    color_hue: Optional[int] = Field(default=None, ge=0, le=360)
    holdings: list[HoldingCreateRequest] = Field(default_factory=list)


class MemberUpdateRequest(BaseModel):
    """Request schema for editing a member (partial update)."""

    name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    color_hue: Optional[int] = Field(default=None, ge=0, le=360)


class CashRequest(BaseModel):
    """Request schema for a deposit or withdrawal."""

    amount: Decimal = Field(..., gt=0, description="Cash amount")
    note: Optional[str] = Field(default=None, max_length=500)


class WithdrawalResponse(BaseModel):
    """Response schema for a withdrawal."""

    model_config = {"from_attributes": True}

    member_id: str
    requested: Decimal
    withdrawn: Decimal
    outcome: WithdrawalOutcome
    cash_balance: Decimal
