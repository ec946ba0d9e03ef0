"""SQLAlchemy implementation of GroupRepository."""

from datetime import datetime
from decimal import Decimal
from typing import Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from league.core.timezone import to_eastern, to_naive_eastern
from league.domain.models import (
    ActivityEvent,
    GroupState,
    Holding,
    Member,
    PortfolioSnapshot,
    Season,
    SeasonBaselines,
)
from league.repositories.sqlalchemy.orm_models import (
    ActivityEventORM,
    GroupORM,
    HoldingORM,
    MemberORM,
    PortfolioSnapshotORM,
    SeasonBaselineORM,
    SeasonORM,
)

# Child tables, in the order they are cleared before a save
_CHILD_MODELS = (
    SeasonBaselineORM,
    SeasonORM,
    PortfolioSnapshotORM,
    ActivityEventORM,
    HoldingORM,
    MemberORM,
)


def _dec(value) -> Decimal:
    return Decimal(str(value)) if value is not None else Decimal("0")


def _opt_dec(value) -> Optional[Decimal]:
    return Decimal(str(value)) if value is not None else None


def _store_time(value: Optional[datetime]) -> Optional[datetime]:
    return to_naive_eastern(value) if value is not None else None


def _load_time(value: Optional[datetime]) -> Optional[datetime]:
    return to_eastern(value) if value is not None else None


class SqlAlchemyGroupRepository:
    """
    SQLAlchemy-backed group repository.

    save() replaces the stored children of a group with the in-memory state,
    so a group is always written as one consistent unit.
    """

    def __init__(self, db: Session):
        self._db = db

    def load(self, group_id: str) -> Optional[GroupState]:
        """Retrieve a group by ID."""
        orm_group = self._db.query(GroupORM).filter(
            GroupORM.group_id == group_id
        ).first()
        return self._to_domain(orm_group) if orm_group else None

    def get_by_name(self, name: str) -> Optional[GroupState]:
        """Retrieve a group by name (case-insensitive)."""
        orm_group = self._db.query(GroupORM).filter(
            func.lower(GroupORM.name) == name.strip().lower()
        ).first()
        return self._to_domain(orm_group) if orm_group else None

    def list_all(self) -> list[GroupState]:
        """List all groups."""
        orm_groups = self._db.query(GroupORM).order_by(GroupORM.name).all()
        return [self._to_domain(g) for g in orm_groups]

    def save(self, group: GroupState) -> GroupState:
        """Persist the full state of a group."""
        for model in _CHILD_MODELS:
            self._db.query(model).filter(
                model.group_id == group.group_id
            ).delete(synchronize_session=False)
        # Rows loaded earlier would clash with the re-inserted primary keys
        self._db.expunge_all()

        orm_group = self._db.query(GroupORM).filter(
            GroupORM.group_id == group.group_id
        ).first()
        if orm_group is None:
            orm_group = GroupORM(group_id=group.group_id)
            self._db.add(orm_group)

        orm_group.name = group.name
        orm_group.leader_id = group.leader_id
        orm_group.current_season_id = group.current_season_id
        orm_group.created_at_est = _store_time(group.created_at)
        self._db.flush()

        self._db.add_all(self._children_to_orm(group))
        self._db.commit()
        return self.load(group.group_id)

    def delete(self, group_id: str) -> None:
        """Delete a group and everything it owns."""
        for model in _CHILD_MODELS:
            self._db.query(model).filter(model.group_id == group_id).delete()
        self._db.query(GroupORM).filter(GroupORM.group_id == group_id).delete()
        self._db.commit()

    # -------------------------------------------------------------------------
    # Mapping
    # -------------------------------------------------------------------------

    @staticmethod
    def _children_to_orm(group: GroupState) -> list:
        rows: list = []
        gid = group.group_id

        for position, m in enumerate(group.members):
            rows.append(MemberORM(
                member_id=m.member_id,
                group_id=gid,
                position=position,
                name=m.name,
                color_hue=m.color_hue,
                cash_balance=m.cash_balance,
                total_realized_pnl=m.total_realized_pnl,
                net_deposits=m.net_deposits,
                initial_value=m.initial_value,
                initial_capital=m.initial_capital,
                created_at_est=_store_time(m.created_at),
            ))

        for position, h in enumerate(group.holdings):
            rows.append(HoldingORM(
                holding_id=h.holding_id,
                group_id=gid,
                member_id=h.member_id,
                position=position,
                symbol=h.symbol,
                name=h.name,
                asset_class=h.asset_class,
                quantity=h.quantity,
                avg_buy_price=h.avg_buy_price,
                current_price=h.current_price,
                last_price_update_est=_store_time(h.last_price_update),
                price_lookup_key=h.price_lookup_key,
            ))

        for sequence, e in enumerate(group.activity):
            rows.append(ActivityEventORM(
                event_id=e.event_id,
                group_id=gid,
                sequence=sequence,
                timestamp_est=_store_time(e.timestamp),
                member_id=e.member_id,
                event_type=e.event_type,
                symbol=e.symbol,
                title=e.title,
                description=e.description,
                amount=e.amount,
            ))

        for sequence, s in enumerate(group.snapshots):
            rows.append(PortfolioSnapshotORM(
                snapshot_id=s.snapshot_id,
                group_id=gid,
                sequence=sequence,
                timestamp_est=_store_time(s.timestamp),
                entity_id=s.entity_id,
                scope=s.scope,
                total_value=s.total_value,
                cost_basis=s.cost_basis,
            ))

        for season in group.seasons:
            rows.append(SeasonORM(
                group_id=gid,
                season_id=season.season_id,
                name=season.name,
                start_time_est=_store_time(season.start_time),
                end_time_est=_store_time(season.end_time),
                leader_id=season.leader_id,
            ))
            for member_id, value in season.member_snapshots.items():
                rows.append(SeasonBaselineORM(
                    group_id=gid,
                    season_id=season.season_id,
                    member_id=member_id,
                    value=value,
                ))

        return rows

    def _to_domain(self, orm: GroupORM) -> GroupState:
        """Convert ORM rows to the group aggregate."""
        gid = orm.group_id

        members = [
            Member(
                member_id=m.member_id,
                name=m.name,
                color_hue=m.color_hue,
                cash_balance=_dec(m.cash_balance),
                total_realized_pnl=_dec(m.total_realized_pnl),
                net_deposits=_dec(m.net_deposits),
                initial_value=_opt_dec(m.initial_value),
                initial_capital=_opt_dec(m.initial_capital),
                created_at=_load_time(m.created_at_est),
            )
            for m in self._db.query(MemberORM)
            .filter(MemberORM.group_id == gid)
            .order_by(MemberORM.position)
            .all()
        ]
        member_ids = [m.member_id for m in members]

        holdings = [
            Holding(
                holding_id=h.holding_id,
                member_id=h.member_id,
                symbol=h.symbol,
                name=h.name,
                asset_class=h.asset_class,
                quantity=_dec(h.quantity),
                avg_buy_price=_dec(h.avg_buy_price),
                current_price=_dec(h.current_price),
                last_price_update=_load_time(h.last_price_update_est),
                price_lookup_key=h.price_lookup_key,
            )
            for h in self._db.query(HoldingORM)
            .filter(HoldingORM.group_id == gid)
            .order_by(HoldingORM.position)
            .all()
        ]

        activity = [
            ActivityEvent(
                event_id=e.event_id,
                timestamp=_load_time(e.timestamp_est),
                event_type=e.event_type,
                title=e.title,
                member_id=e.member_id,
                symbol=e.symbol,
                description=e.description,
                amount=_opt_dec(e.amount),
            )
            for e in self._db.query(ActivityEventORM)
            .filter(ActivityEventORM.group_id == gid)
            .order_by(ActivityEventORM.sequence)
            .all()
        ]

        snapshots = [
            PortfolioSnapshot(
                snapshot_id=s.snapshot_id,
                timestamp=_load_time(s.timestamp_est),
                entity_id=s.entity_id,
                total_value=_dec(s.total_value),
                cost_basis=_dec(s.cost_basis),
                scope=s.scope,
            )
            for s in self._db.query(PortfolioSnapshotORM)
            .filter(PortfolioSnapshotORM.group_id == gid)
            .order_by(PortfolioSnapshotORM.sequence)
            .all()
        ]

        baselines: dict[str, dict[str, Decimal]] = {}
        for b in self._db.query(SeasonBaselineORM).filter(SeasonBaselineORM.group_id == gid).all():
            baselines.setdefault(b.season_id, {})[b.member_id] = _dec(b.value)

        seasons = [
            Season(
                season_id=s.season_id,
                name=s.name,
                start_time=_load_time(s.start_time_est),
                leader_id=s.leader_id,
                member_snapshots=SeasonBaselines(baselines.get(s.season_id, {}), member_ids),
                end_time=_load_time(s.end_time_est),
            )
            for s in self._db.query(SeasonORM)
            .filter(SeasonORM.group_id == gid)
            .order_by(SeasonORM.start_time_est)
            .all()
        ]

        return GroupState(
            group_id=gid,
            name=orm.name,
            members=members,
            holdings=holdings,
            activity=activity,
            snapshots=snapshots,
            leader_id=orm.leader_id,
            current_season_id=orm.current_season_id,
            seasons=seasons,
            created_at=_load_time(orm.created_at_est),
        )
