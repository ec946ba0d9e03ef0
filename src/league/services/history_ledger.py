"""
History ledger: snapshot recording, retention and chart aggregation.

Every mutation that can move a member's value records a user-scope snapshot
for each affected member plus one group-scope rollup. History is capped per
entity, so a quiet member's points are never pushed out by a busy one.

Snapshot policy is fixed per ledger instance:
    APPEND          - every mutation adds a point
    COALESCE_DAILY  - a point on the same Eastern calendar day as the entity's
                      latest point replaces it (chart ranges under a day will
                      be sparse)
"""

import logging
import uuid
from datetime import datetime, timedelta
from decimal import Decimal
from typing import Iterable, Optional, Sequence

from league.core.timezone import now_eastern, same_eastern_day, to_eastern
from league.domain.models import (
    ChartRange,
    GroupState,
    PortfolioSnapshot,
    SnapshotPolicy,
    SnapshotScope,
)
from league.services.valuation import ZERO, member_metrics

logger = logging.getLogger(__name__)

DEFAULT_RETENTION_LIMIT = 200

# Lookback window per chart range (None = unbounded)
RANGE_WINDOWS: dict[ChartRange, Optional[timedelta]] = {
    ChartRange.ONE_DAY: timedelta(days=1),
    ChartRange.ONE_WEEK: timedelta(days=7),
    ChartRange.ONE_MONTH: timedelta(days=30),
    ChartRange.ONE_YEAR: timedelta(days=365),
    ChartRange.ALL: None,
}

# Maximum points drawn per chart range
RANGE_MAX_POINTS: dict[ChartRange, int] = {
    ChartRange.ONE_DAY: 96,  # every 15 min
    ChartRange.ONE_WEEK: 42,  # every 4 hours
    ChartRange.ONE_MONTH: 30,  # daily
    ChartRange.ONE_YEAR: 52,  # weekly
    ChartRange.ALL: 100,
}


def _sort_key(snapshot: PortfolioSnapshot) -> datetime:
    return to_eastern(snapshot.timestamp)


def history_for(
    snapshots: Iterable[PortfolioSnapshot],
    entity_id: str,
    scope: Optional[SnapshotScope] = None,
) -> list[PortfolioSnapshot]:
    """Return one entity's snapshots in ascending time order."""
    selected = [
        s for s in snapshots
        if s.entity_id == entity_id and (scope is None or s.scope == scope)
    ]
    return sorted(selected, key=_sort_key)


def trim_to_retention(
    snapshots: Sequence[PortfolioSnapshot],
    entity_id: str,
    scope: SnapshotScope,
    limit: int,
) -> list[PortfolioSnapshot]:
    """
    Drop the oldest snapshots of one entity beyond `limit`.

    Other entities' snapshots are untouched and the list order is preserved.
    """
    owned = [s for s in snapshots if s.belongs_to(entity_id, scope)]
    excess = len(owned) - limit
    if excess <= 0:
        return list(snapshots)

    dropped = {id(s) for s in sorted(owned, key=_sort_key)[:excess]}
    return [s for s in snapshots if id(s) not in dropped]


def downsample(points: Sequence[PortfolioSnapshot], max_points: int) -> list[PortfolioSnapshot]:
    """
    Pick evenly spaced points, always keeping the latest one.

    `points` must already be in ascending time order.
    """
    count = len(points)
    if count <= max_points:
        return list(points)

    result = [points[(i * count) // max_points] for i in range(max_points)]
    if result[-1] is not points[-1]:
        result.append(points[-1])
    return result


def aggregate_for_chart(
    snapshots: Iterable[PortfolioSnapshot],
    chart_range: ChartRange,
    entity_id: Optional[str] = None,
    scope: Optional[SnapshotScope] = None,
    now: Optional[datetime] = None,
) -> list[PortfolioSnapshot]:
    """
    Prepare a snapshot series for a chart.

    Filters to the entity (if given) and to the range window ending at `now`
    (points after `now` are dropped, even for ALL), sorts ascending and
    downsamples to the range's point limit. Pure: the same inputs always
    give the same output.
    """
    chart_range = ChartRange(chart_range)
    selected = [
        s for s in snapshots
        if (entity_id is None or s.entity_id == entity_id)
        and (scope is None or s.scope == scope)
    ]
    if not selected:
        return []

    end = to_eastern(now or now_eastern())
    selected = [s for s in selected if to_eastern(s.timestamp) <= end]
    window = RANGE_WINDOWS[chart_range]
    if window is not None:
        cutoff = end - window
        selected = [s for s in selected if to_eastern(s.timestamp) >= cutoff]

    selected.sort(key=_sort_key)
    return downsample(selected, RANGE_MAX_POINTS[chart_range])


class HistoryLedger:
    """
    Records valuation snapshots after mutations.

    Mutates group.snapshots in place; persistence is the caller's job.
    """

    def __init__(
        self,
        retention_limit: int = DEFAULT_RETENTION_LIMIT,
        policy: SnapshotPolicy = SnapshotPolicy.APPEND,
    ):
        if retention_limit < 1:
            raise ValueError("retention_limit must be at least 1")
        self._retention_limit = retention_limit
        self._policy = SnapshotPolicy(policy)

    @property
    def retention_limit(self) -> int:
        return self._retention_limit

    @property
    def policy(self) -> SnapshotPolicy:
        return self._policy

    def record_mutation_snapshot(
        self,
        group: GroupState,
        member_ids: Iterable[str],
        timestamp: Optional[datetime] = None,
    ) -> list[PortfolioSnapshot]:
        """
        Record fresh valuations for the affected members and the group.

        Appends (or, when coalescing, replaces) one user-scope snapshot per
        affected member still in the group, then one group-scope rollup summing
        every member. Returns the snapshots written.
        """
        at = timestamp or now_eastern()
        written: list[PortfolioSnapshot] = []

        for member_id in dict.fromkeys(member_ids):
            member = group.find_member(member_id)
            if member is None:
                logger.warning(
                    "Skipping snapshot for unknown member %s in group %s",
                    member_id,
                    group.group_id,
                )
                continue
            metrics = member_metrics(member, group.holdings)
            written.append(
                self._record(
                    group,
                    entity_id=member.member_id,
                    scope=SnapshotScope.USER,
                    total_value=metrics.portfolio_value,
                    cost_basis=metrics.total_cost_basis,
                    at=at,
                )
            )

        total_value = ZERO
        cost_basis = ZERO
        for member in group.members:
            metrics = member_metrics(member, group.holdings)
            total_value += metrics.portfolio_value
            cost_basis += metrics.total_cost_basis

        written.append(
            self._record(
                group,
                entity_id=group.group_id,
                scope=SnapshotScope.GROUP,
                total_value=total_value,
                cost_basis=cost_basis,
                at=at,
            )
        )
        return written

    def _record(
        self,
        group: GroupState,
        entity_id: str,
        scope: SnapshotScope,
        total_value: Decimal,
        cost_basis: Decimal,
        at: datetime,
    ) -> PortfolioSnapshot:
        snapshot = PortfolioSnapshot(
            snapshot_id=str(uuid.uuid4()),
            timestamp=at,
            entity_id=entity_id,
            total_value=total_value,
            cost_basis=cost_basis,
            scope=scope,
        )

        replaced = False
        if self._policy == SnapshotPolicy.COALESCE_DAILY:
            replaced = self._replace_same_day(group, snapshot)
        if not replaced:
            group.snapshots.append(snapshot)

        group.snapshots = trim_to_retention(
            group.snapshots, entity_id, scope, self._retention_limit
        )
        return snapshot

    @staticmethod
    def _replace_same_day(group: GroupState, snapshot: PortfolioSnapshot) -> bool:
        """Swap in `snapshot` for the entity's latest point if it is from the same day."""
        latest_index: Optional[int] = None
        for index, existing in enumerate(group.snapshots):
            if not existing.belongs_to(snapshot.entity_id, snapshot.scope):
                continue
            if latest_index is None or _sort_key(existing) >= _sort_key(group.snapshots[latest_index]):
                latest_index = index

        if latest_index is None:
            return False
        if not same_eastern_day(group.snapshots[latest_index].timestamp, snapshot.timestamp):
            return False

        group.snapshots[latest_index] = snapshot
        return True
