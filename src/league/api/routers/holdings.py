"""Holding and price endpoints."""

from fastapi import APIRouter, Depends

from league.api.deps import get_portfolio_service
from league.api.errors import unwrap
from league.api.schemas import (
    HoldingResponse,
    HoldingUpdateRequest,
    PriceUpdateRequest,
    PriceUpdateResponse,
    SaleResponse,
    SellRequest,
)
from league.services import HoldingUpdate, PortfolioService

router = APIRouter(prefix="/groups/{group_id}", tags=["holdings"])


@router.patch("/holdings/{holding_id}", response_model=HoldingResponse)
def update_holding(
    group_id: str,
    holding_id: str,
    data: HoldingUpdateRequest,
    service: PortfolioService = Depends(get_portfolio_service),
) -> HoldingResponse:
    """Edit a holding."""
    holding = unwrap(service.update_holding(
        group_id,
        holding_id,
        HoldingUpdate(**data.model_dump(exclude_unset=True)),
    ))
    return HoldingResponse.model_validate(holding)


@router.post("/holdings/{holding_id}/sell", response_model=SaleResponse)
def sell_holding(
    group_id: str,
    holding_id: str,
    data: SellRequest,
    service: PortfolioService = Depends(get_portfolio_service),
) -> SaleResponse:
    """Sell a whole position."""
    sale = unwrap(service.sell_holding(
        group_id,
        holding_id,
        sell_price=data.sell_price,
        note=data.note,
    ))
    return SaleResponse.model_validate(sale)


@router.post("/prices", response_model=PriceUpdateResponse)
def update_prices(
    group_id: str,
    data: PriceUpdateRequest,
    service: PortfolioService = Depends(get_portfolio_service),
) -> PriceUpdateResponse:
    """Apply fresh market prices to the group's holdings."""
    changed = unwrap(service.update_prices(group_id, data.prices))
    return PriceUpdateResponse(
        updated=[HoldingResponse.model_validate(h) for h in changed],
        count=len(changed),
    )
