"""Member and cash endpoints."""

from fastapi import APIRouter, Depends

from league.api.deps import get_portfolio_service
from league.api.errors import unwrap
from league.api.schemas import (
    CashRequest,
    HoldingCreateRequest,
    HoldingResponse,
    MemberResponse,
    MemberUpdateRequest,
    ProfileCreateRequest,
    WithdrawalResponse,
)
from league.services import (
    HoldingCreate,
    MemberUpdate,
    PortfolioService,
    ProfileCreate,
)

router = APIRouter(prefix="/groups/{group_id}/members", tags=["members"])


def _holding_input(data: HoldingCreateRequest) -> HoldingCreate:
    return HoldingCreate(
        symbol=data.symbol,
        quantity=data.quantity,
        price=data.price,
        name=data.name,
        asset_class=data.asset_class,
        current_price=data.current_price,
        price_lookup_key=data.price_lookup_key,
    )


@router.post("", response_model=MemberResponse, status_code=201)
def create_profile(
    group_id: str,
    data: ProfileCreateRequest,
    service: PortfolioService = Depends(get_portfolio_service),
) -> MemberResponse:
    """Join the group with starting cash and optional holdings."""
    member = unwrap(service.create_profile(
        group_id,
        ProfileCreate(
            name=data.name,
            initial_cash=data.initial_cash,
            color_hue=data.color_hue,
            holdings=[_holding_input(h) for h in data.holdings],
        ),
    ))
    return MemberResponse.model_validate(member)


@router.patch("/{member_id}", response_model=MemberResponse)
def update_member(
    group_id: str,
    member_id: str,
    data: MemberUpdateRequest,
    service: PortfolioService = Depends(get_portfolio_service),
) -> MemberResponse:
    """Rename a member or change their color."""
    member = unwrap(service.update_member(
        group_id,
        member_id,
        MemberUpdate(name=data.name, color_hue=data.color_hue),
    ))
    return MemberResponse.model_validate(member)


@router.delete("/{member_id}", status_code=204)
def remove_member(
    group_id: str,
    member_id: str,
    service: PortfolioService = Depends(get_portfolio_service),
) -> None:
    """Remove a member and their holdings."""
    unwrap(service.remove_member(group_id, member_id))


@router.post("/{member_id}/deposit", response_model=MemberResponse)
def deposit(
    group_id: str,
    member_id: str,
    data: CashRequest,
    service: PortfolioService = Depends(get_portfolio_service),
) -> MemberResponse:
    """Deposit cash."""
    member = unwrap(service.deposit_cash(group_id, member_id, data.amount, note=data.note))
    return MemberResponse.model_validate(member)


@router.post("/{member_id}/withdraw", response_model=WithdrawalResponse)
def withdraw(
    group_id: str,
    member_id: str,
    data: CashRequest,
    service: PortfolioService = Depends(get_portfolio_service),
) -> WithdrawalResponse:
    """Withdraw cash; the outcome reports whether the amount was clamped."""
    withdrawal = unwrap(service.withdraw_cash(group_id, member_id, data.amount, note=data.note))
    return WithdrawalResponse.model_validate(withdrawal)


@router.post("/{member_id}/holdings", response_model=HoldingResponse, status_code=201)
def buy_holding(
    group_id: str,
    member_id: str,
    data: HoldingCreateRequest,
    service: PortfolioService = Depends(get_portfolio_service),
) -> HoldingResponse:
    """Buy a new position with the member's cash."""
    holding = unwrap(service.buy_holding(group_id, member_id, _holding_input(data)))
    return HoldingResponse.model_validate(holding)
