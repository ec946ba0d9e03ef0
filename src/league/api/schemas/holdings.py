"""Pydantic schemas for holding and price endpoints."""

from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from league.api.schemas.groups import HoldingResponse
from league.domain.models import AssetClass


class HoldingCreateRequest(BaseModel):
    """Request schema for buying (or seeding) a holding."""

    symbol: str = Field(..., min_length=1, max_length=20)
    quantity: Decimal = Field(..., gt=0)
    price: Decimal = Field(..., ge=0, description="Buy price per unit")
    name: Optional[str] = Field(default=None, max_length=255)
    asset_class: AssetClass = AssetClass.STOCK
    current_price: Optional[Decimal] = Field(default=None, ge=0)
    price_lookup_key: Optional[str] = Field(default=None, max_length=100)

    @field_validator("symbol")
    @classmethod
    def uppercase_symbol(cls, v: str) -> str:
        return v.strip().upper()


class HoldingUpdateRequest(BaseModel):
    """Request schema for editing a holding (partial update)."""

    symbol: Optional[str] = Field(default=None, min_length=1, max_length=20)
    name: Optional[str] = Field(default=None, max_length=255)
    asset_class: Optional[AssetClass] = None
    quantity: Optional[Decimal] = Field(default=None, gt=0)
    avg_buy_price: Optional[Decimal] = Field(default=None, ge=0)
    current_price: Optional[Decimal] = Field(default=None, ge=0)
    price_lookup_key: Optional[str] = Field(default=None, max_length=100)


class SellRequest(BaseModel):
    """Request schema for closing a position."""

    sell_price: Optional[Decimal] = Field(default=None, ge=0, description="Defaults to current price")
    note: Optional[str] = Field(default=None, max_length=500)


class SaleResponse(BaseModel):
    """Response schema for a completed sale."""

    model_config = {"from_attributes": True}

    holding_id: str
    member_id: str
    symbol: str
    quantity: Decimal
    sell_price: Decimal
    proceeds: Decimal
    cost_basis: Decimal
    realized_pnl: Decimal
    note: Optional[str] = None


class PriceUpdateRequest(BaseModel):
    """Request schema for a symbol -> price map."""

    prices: dict[str, Decimal]


class PriceUpdateResponse(BaseModel):
    """Response schema listing the holdings whose price changed."""

    updated: list[HoldingResponse]
    count: int
