"""Portfolio service: cash, holding and membership mutations for a group."""

import logging
import random
import uuid
from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Mapping, Optional

from league.core.exceptions import NotFoundError, ValidationError
from league.core.results import FailureReason, OperationResult
from league.core.timezone import now_eastern
from league.domain.models import (
    ActivityEvent,
    ActivityType,
    AssetClass,
    GroupState,
    Holding,
    Member,
    WithdrawalOutcome,
    WithdrawalPolicy,
    normalize_symbol,
)
from league.domain.views import Sale, Withdrawal
from league.repositories.protocols import GroupRepository
from league.services.history_ledger import HistoryLedger
from league.services.valuation import ZERO

logger = logging.getLogger(__name__)


@dataclass
class HoldingCreate:
    """Input data for buying or seeding a holding."""

    symbol: str
    quantity: Decimal
    price: Decimal
    name: Optional[str] = None
    asset_class: AssetClass = AssetClass.STOCK
    current_price: Optional[Decimal] = None
    price_lookup_key: Optional[str] = None


@dataclass
class HoldingUpdate:
    """Partial update data for editing a holding."""

    symbol: Optional[str] = None
    name: Optional[str] = None
    asset_class: Optional[AssetClass] = None
    quantity: Optional[Decimal] = None
    avg_buy_price: Optional[Decimal] = None
    current_price: Optional[Decimal] = None
    price_lookup_key: Optional[str] = None


@dataclass
class ProfileCreate:
    """Input data for joining a group with starting cash and holdings."""

    name: str
    initial_cash: Decimal = Decimal("0")
    color_hue: Optional[int] = None
    holdings: list[HoldingCreate] = field(default_factory=list)


@dataclass
class MemberUpdate:
    """Partial update data for a member's profile."""

    name: Optional[str] = None
    color_hue: Optional[int] = None


def _money(value: Decimal) -> str:
    return f"${value:,.2f}"


def _check_holding_input(data: HoldingCreate) -> Optional[str]:
    if not data.symbol or not data.symbol.strip():
        return "Symbol is required"
    if data.quantity is None or data.quantity <= ZERO:
        return "Quantity must be positive"
    if data.price is None or data.price < ZERO:
        return "Price cannot be negative"
    if data.current_price is not None and data.current_price < ZERO:
        return "Current price cannot be negative"
    return None


class PortfolioService:
    """
    Applies ledger mutations to a group.

    Each call is one unit of work: load the group, validate, mutate, record
    history, log activity, save. Refused operations return a failed
    OperationResult and save nothing. An unknown group raises NotFoundError.
    """

    def __init__(
        self,
        group_repo: GroupRepository,
        history: Optional[HistoryLedger] = None,
        withdrawal_policy: WithdrawalPolicy = WithdrawalPolicy.CLAMP,
    ):
        self._group_repo = group_repo
        self._history = history or HistoryLedger()
        self._withdrawal_policy = WithdrawalPolicy(withdrawal_policy)

    @property
    def history(self) -> HistoryLedger:
        return self._history

    # -------------------------------------------------------------------------
    # Groups
    # -------------------------------------------------------------------------

    def create_group(self, name: str, at: Optional[datetime] = None) -> GroupState:
        """
        Create an empty group.

        Raises:
            ValidationError: if the name is blank or already taken
        """
        name = (name or "").strip()
        if not name:
            raise ValidationError("Group name is required")
        if self._group_repo.get_by_name(name):
            raise ValidationError(f"Group with name '{name}' already exists")

        created_at = at or now_eastern()
        group = GroupState(
            group_id=str(uuid.uuid4()),
            name=name,
            created_at=created_at,
        )
        group.log(self._event(
            ActivityType.GROUP_CREATED,
            f"{name} created",
            created_at,
            description="The group was created.",
        ))
        logger.info("Created group %s (%s)", name, group.group_id)
        return self._group_repo.save(group)

    def get_group(self, group_id: str) -> GroupState:
        """Get group by ID."""
        group = self._group_repo.load(group_id)
        if group is None:
            raise NotFoundError("Group", group_id)
        return group

    def list_groups(self) -> list[GroupState]:
        """List all groups."""
        return self._group_repo.list_all()

    # -------------------------------------------------------------------------
    # Members
    # -------------------------------------------------------------------------

    def create_profile(
        self,
        group_id: str,
        data: ProfileCreate,
        at: Optional[datetime] = None,
    ) -> OperationResult[Member]:
        """
        Join a group with starting cash and optional seeded holdings.

        Seeded holdings do not draw on the starting cash. The member's
        all-time baseline is fixed at starting cash plus seeded cost basis.
        """
        group = self.get_group(group_id)

        name = (data.name or "").strip()
        if not name:
            return self._refuse(FailureReason.INVALID_INPUT, "Member name is required")
        initial_cash = Decimal(str(data.initial_cash or 0))
        if initial_cash < ZERO:
            return self._refuse(FailureReason.INVALID_INPUT, "Initial cash cannot be negative")
        for seed in data.holdings:
            problem = _check_holding_input(seed)
            if problem:
                return self._refuse(FailureReason.INVALID_INPUT, problem)

        joined_at = at or now_eastern()
        member = Member(
            member_id=str(uuid.uuid4()),
            name=name,
            color_hue=data.color_hue if data.color_hue is not None else random.randint(0, 360),
            cash_balance=initial_cash,
            net_deposits=initial_cash,
            created_at=joined_at,
        )
        seeded = [self._new_holding(member.member_id, seed) for seed in data.holdings]
        member.initial_value = initial_cash + sum((h.cost_basis for h in seeded), ZERO)

        group.members.append(member)
        group.holdings.extend(seeded)

        # Activity is newest-first: the join event sits below its seeded buys
        group.log(self._event(
            ActivityType.JOIN,
            f"{name} joined the group",
            joined_at,
            member_id=member.member_id,
            description=f"Created profile with {_money(initial_cash)} initial cash.",
            amount=initial_cash,
        ))
        for holding in seeded:
            group.log(self._buy_event(holding, joined_at))

        self._commit(group, [member.member_id], joined_at)
        logger.info("Member %s joined group %s", member.member_id, group_id)
        return OperationResult.success(member)

    def add_member(self, group_id: str, name: str, at: Optional[datetime] = None) -> OperationResult[Member]:
        """Add a member with no cash and no holdings."""
        return self.create_profile(group_id, ProfileCreate(name=name), at=at)

    def update_member(
        self,
        group_id: str,
        member_id: str,
        patch: MemberUpdate,
    ) -> OperationResult[Member]:
        """Rename a member or change their color."""
        group = self.get_group(group_id)
        member = group.find_member(member_id)
        if member is None:
            return self._refuse(FailureReason.NOT_FOUND, f"Member not found: {member_id}")

        if patch.name is not None:
            name = patch.name.strip()
            if not name:
                return self._refuse(FailureReason.INVALID_INPUT, "Member name is required")
            member.name = name
        if patch.color_hue is not None:
            member.color_hue = max(0, min(360, int(patch.color_hue)))

        self._group_repo.save(group)
        return OperationResult.success(member)

    def remove_member(
        self,
        group_id: str,
        member_id: str,
        at: Optional[datetime] = None,
    ) -> OperationResult[Member]:
        """
        Remove a member together with their holdings.

        Their season baselines are pruned and their snapshot history is kept.
        """
        group = self.get_group(group_id)
        member = group.find_member(member_id)
        if member is None:
            return self._refuse(FailureReason.NOT_FOUND, f"Member not found: {member_id}")

        removed_at = at or now_eastern()
        group.members = [m for m in group.members if m.member_id != member_id]
        group.holdings = [h for h in group.holdings if h.member_id != member_id]
        for season in group.seasons:
            if member_id in season.member_snapshots:
                season.member_snapshots = season.member_snapshots.without(member_id)
        if group.leader_id == member_id:
            group.leader_id = None

        group.log(self._event(
            ActivityType.NOTE,
            f"{member.name} left the group",
            removed_at,
        ))
        self._commit(group, [], removed_at)
        logger.info("Member %s removed from group %s", member_id, group_id)
        return OperationResult.success(member)

    # -------------------------------------------------------------------------
    # Cash
    # -------------------------------------------------------------------------

    def deposit_cash(
        self,
        group_id: str,
        member_id: str,
        amount: Decimal,
        note: Optional[str] = None,
        at: Optional[datetime] = None,
    ) -> OperationResult[Member]:
        """Add cash to a member's balance."""
        group = self.get_group(group_id)
        if amount is None or amount <= ZERO:
            return self._refuse(FailureReason.INVALID_INPUT, "Deposit amount must be positive")
        member = group.find_member(member_id)
        if member is None:
            return self._refuse(FailureReason.NOT_FOUND, f"Member not found: {member_id}")

        deposited_at = at or now_eastern()
        member.cash_balance += amount
        member.net_deposits += amount

        group.log(self._event(
            ActivityType.DEPOSIT,
            f"Deposited {_money(amount)}",
            deposited_at,
            member_id=member_id,
            description=note,
            amount=amount,
        ))
        self._commit(group, [member_id], deposited_at)
        return OperationResult.success(member)

    def withdraw_cash(
        self,
        group_id: str,
        member_id: str,
        amount: Decimal,
        note: Optional[str] = None,
        at: Optional[datetime] = None,
    ) -> OperationResult[Withdrawal]:
        """
        Take cash out of a member's balance.

        With the CLAMP policy an over-withdrawal empties the balance and is
        reported as CLAMPED; with REJECT it fails with INSUFFICIENT_FUNDS.
        """
        group = self.get_group(group_id)
        if amount is None or amount <= ZERO:
            return self._refuse(FailureReason.INVALID_INPUT, "Withdrawal amount must be positive")
        member = group.find_member(member_id)
        if member is None:
            return self._refuse(FailureReason.NOT_FOUND, f"Member not found: {member_id}")

        balance = member.cash_balance
        if amount > balance and self._withdrawal_policy == WithdrawalPolicy.REJECT:
            return self._refuse(
                FailureReason.INSUFFICIENT_FUNDS,
                f"Cannot withdraw {_money(amount)}; available cash is {_money(balance)}",
                value=Withdrawal(
                    member_id=member_id,
                    requested=amount,
                    withdrawn=ZERO,
                    outcome=WithdrawalOutcome.REJECTED,
                    cash_balance=balance,
                ),
            )

        withdrawn = min(amount, max(balance, ZERO))
        outcome = WithdrawalOutcome.CLAMPED if amount > balance else WithdrawalOutcome.APPLIED
        withdrawn_at = at or now_eastern()
        member.cash_balance = max(balance - amount, ZERO)
        member.net_deposits -= withdrawn

        group.log(self._event(
            ActivityType.WITHDRAW,
            f"Withdrew {_money(withdrawn)}",
            withdrawn_at,
            member_id=member_id,
            description=note,
            amount=-withdrawn,
        ))
        self._commit(group, [member_id], withdrawn_at)
        if outcome == WithdrawalOutcome.CLAMPED:
            logger.warning(
                "Withdrawal of %s clamped to %s for member %s",
                amount,
                withdrawn,
                member_id,
            )

        return OperationResult.success(
            Withdrawal(
                member_id=member_id,
                requested=amount,
                withdrawn=withdrawn,
                outcome=outcome,
                cash_balance=member.cash_balance,
            )
        )

    # -------------------------------------------------------------------------
    # Holdings
    # -------------------------------------------------------------------------

    def buy_holding(
        self,
        group_id: str,
        member_id: str,
        data: HoldingCreate,
        at: Optional[datetime] = None,
    ) -> OperationResult[Holding]:
        """Buy a new position, paying quantity x price from cash."""
        group = self.get_group(group_id)
        problem = _check_holding_input(data)
        if problem:
            return self._refuse(FailureReason.INVALID_INPUT, problem)
        member = group.find_member(member_id)
        if member is None:
            return self._refuse(FailureReason.NOT_FOUND, f"Member not found: {member_id}")

        cost = data.quantity * data.price
        if cost > member.cash_balance:
            return self._refuse(
                FailureReason.INSUFFICIENT_FUNDS,
                f"Cost {_money(cost)} exceeds available cash {_money(member.cash_balance)}",
            )

        bought_at = at or now_eastern()
        holding = self._new_holding(member_id, data)
        member.cash_balance -= cost
        group.holdings.append(holding)

        group.log(self._buy_event(holding, bought_at))
        self._commit(group, [member_id], bought_at)
        logger.info("Member %s bought %s %s", member_id, holding.quantity, holding.symbol)
        return OperationResult.success(holding)

    def update_holding(
        self,
        group_id: str,
        holding_id: str,
        patch: HoldingUpdate,
        at: Optional[datetime] = None,
    ) -> OperationResult[Holding]:
        """Edit a holding's fields without moving cash."""
        group = self.get_group(group_id)
        holding = group.find_holding(holding_id)
        if holding is None:
            return self._refuse(FailureReason.NOT_FOUND, f"Holding not found: {holding_id}")

        if patch.symbol is not None and not patch.symbol.strip():
            return self._refuse(FailureReason.INVALID_INPUT, "Symbol is required")
        if patch.quantity is not None and patch.quantity <= ZERO:
            return self._refuse(FailureReason.INVALID_INPUT, "Quantity must be positive")
        for price in (patch.avg_buy_price, patch.current_price):
            if price is not None and price < ZERO:
                return self._refuse(FailureReason.INVALID_INPUT, "Price cannot be negative")

        if patch.symbol is not None:
            holding.symbol = normalize_symbol(patch.symbol)
        if patch.name is not None:
            holding.name = patch.name
        if patch.asset_class is not None:
            holding.asset_class = AssetClass(patch.asset_class)
        if patch.quantity is not None:
            holding.quantity = patch.quantity
        if patch.avg_buy_price is not None:
            holding.avg_buy_price = patch.avg_buy_price
        if patch.current_price is not None:
            holding.current_price = patch.current_price
        if patch.price_lookup_key is not None:
            holding.price_lookup_key = patch.price_lookup_key

        updated_at = at or now_eastern()
        group.log(self._event(
            ActivityType.UPDATE,
            f"Updated {holding.symbol}",
            updated_at,
            member_id=holding.member_id,
            symbol=holding.symbol,
            description=f"{holding.quantity} at {_money(holding.avg_buy_price)}.",
        ))
        self._commit(group, [holding.member_id], updated_at)
        return OperationResult.success(holding)

    def sell_holding(
        self,
        group_id: str,
        holding_id: str,
        sell_price: Optional[Decimal] = None,
        note: Optional[str] = None,
        at: Optional[datetime] = None,
    ) -> OperationResult[Sale]:
        """
        Close a whole position at sell_price (or the current price).

        Proceeds go to cash and the gain over cost basis is added to the
        member's realized P&L.
        """
        group = self.get_group(group_id)
        if sell_price is not None and sell_price < ZERO:
            return self._refuse(FailureReason.INVALID_INPUT, "Sell price cannot be negative")
        holding = group.find_holding(holding_id)
        if holding is None:
            return self._refuse(FailureReason.NOT_FOUND, f"Holding not found: {holding_id}")
        member = group.find_member(holding.member_id)
        if member is None:
            return self._refuse(FailureReason.NOT_FOUND, f"Member not found: {holding.member_id}")

        price = sell_price if sell_price is not None else holding.current_price
        proceeds = holding.quantity * price
        cost_basis = holding.cost_basis
        realized = proceeds - cost_basis

        sold_at = at or now_eastern()
        member.cash_balance += proceeds
        member.total_realized_pnl += realized
        group.holdings = [h for h in group.holdings if h.holding_id != holding_id]

        description = f"Sold {holding.quantity} at {_money(price)}. Realized P&L: {_money(realized)}."
        if note:
            description = f"{description} {note}"
        group.log(self._event(
            ActivityType.SELL,
            f"Sold {holding.symbol}",
            sold_at,
            member_id=member.member_id,
            symbol=holding.symbol,
            description=description,
            amount=realized,
        ))
        self._commit(group, [member.member_id], sold_at)
        logger.info("Member %s sold %s for %s", member.member_id, holding.symbol, proceeds)

        return OperationResult.success(
            Sale(
                holding_id=holding_id,
                member_id=member.member_id,
                symbol=holding.symbol,
                quantity=holding.quantity,
                sell_price=price,
                proceeds=proceeds,
                cost_basis=cost_basis,
                realized_pnl=realized,
                note=note,
            )
        )

    def update_prices(
        self,
        group_id: str,
        price_map: Mapping[str, Decimal],
        at: Optional[datetime] = None,
    ) -> OperationResult[list[Holding]]:
        """
        Apply a symbol -> price map to the group's holdings.

        Only holdings whose price actually changed are touched. No activity is
        logged; each affected member gets a snapshot.
        """
        group = self.get_group(group_id)
        prices = {normalize_symbol(symbol): price for symbol, price in price_map.items()}
        if any(p is None or p < ZERO for p in prices.values()):
            return self._refuse(FailureReason.INVALID_INPUT, "Prices cannot be negative")

        priced_at = at or now_eastern()
        changed: list[Holding] = []
        for holding in group.holdings:
            price = prices.get(holding.symbol)
            if price is None or price == holding.current_price:
                continue
            holding.current_price = price
            holding.last_price_update = priced_at
            changed.append(holding)

        if changed:
            affected = [h.member_id for h in changed]
            self._commit(group, affected, priced_at)
            logger.debug("Updated %d holding prices in group %s", len(changed), group_id)
        return OperationResult.success(changed)

    # -------------------------------------------------------------------------
    # Activity
    # -------------------------------------------------------------------------

    def add_note(
        self,
        group_id: str,
        title: str,
        member_id: Optional[str] = None,
        description: Optional[str] = None,
        at: Optional[datetime] = None,
    ) -> OperationResult[ActivityEvent]:
        """Post a free-form note to the activity feed."""
        group = self.get_group(group_id)
        if not title or not title.strip():
            return self._refuse(FailureReason.INVALID_INPUT, "Note title is required")
        if member_id is not None and group.find_member(member_id) is None:
            return self._refuse(FailureReason.NOT_FOUND, f"Member not found: {member_id}")

        event = self._event(
            ActivityType.NOTE,
            title.strip(),
            at or now_eastern(),
            member_id=member_id,
            description=description,
        )
        group.log(event)
        self._group_repo.save(group)
        return OperationResult.success(event)

    def clear_activity(self, group_id: str) -> int:
        """Delete the group's activity feed. Returns the number of events removed."""
        group = self.get_group(group_id)
        removed = len(group.activity)
        group.activity = []
        self._group_repo.save(group)
        logger.info("Cleared %d activity events in group %s", removed, group_id)
        return removed

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    def _commit(self, group: GroupState, member_ids: list[str], at: datetime) -> None:
        self._history.record_mutation_snapshot(group, member_ids, timestamp=at)
        self._group_repo.save(group)

    @staticmethod
    def _refuse(reason: FailureReason, message: str, value=None) -> OperationResult:
        logger.warning("%s: %s", reason.value, message)
        return OperationResult.fail(reason, message, value=value)

    @staticmethod
    def _new_holding(member_id: str, data: HoldingCreate) -> Holding:
        symbol = normalize_symbol(data.symbol)
        return Holding(
            holding_id=str(uuid.uuid4()),
            member_id=member_id,
            symbol=symbol,
            name=(data.name or "").strip() or symbol,
            asset_class=AssetClass(data.asset_class),
            quantity=data.quantity,
            avg_buy_price=data.price,
            current_price=data.current_price if data.current_price is not None else data.price,
            price_lookup_key=data.price_lookup_key,
        )

    def _buy_event(self, holding: Holding, at: datetime) -> ActivityEvent:
        return self._event(
            ActivityType.BUY,
            f"Bought {holding.symbol}",
            at,
            member_id=holding.member_id,
            symbol=holding.symbol,
            description=f"Bought {holding.quantity} at {_money(holding.avg_buy_price)}.",
            amount=-holding.cost_basis,
        )

    @staticmethod
    def _event(
        event_type: ActivityType,
        title: str,
        at: datetime,
        member_id: Optional[str] = None,
        symbol: Optional[str] = None,
        description: Optional[str] = None,
        amount: Optional[Decimal] = None,
    ) -> ActivityEvent:
        return ActivityEvent(
            event_id=str(uuid.uuid4()),
            timestamp=at,
            event_type=event_type,
            title=title,
            member_id=member_id,
            symbol=symbol,
            description=description,
            amount=amount,
        )
