"""
Season lifecycle over a group.

States: no active season <-> season active. Only the group leader may move
between them. The leader is the recorded leader_id, or the first member when
none has been recorded; the first successful start records its caller.

Refusals are returned as OperationResult failures and leave the group as it was.
"""

import logging
import uuid
from datetime import datetime
from typing import Optional

from league.core.results import FailureReason, OperationResult
from league.core.timezone import now_eastern
from league.domain.models import (
    ActivityEvent,
    ActivityType,
    GroupState,
    Season,
    SeasonBaselines,
)
from league.services.valuation import member_metrics

logger = logging.getLogger(__name__)


def is_group_leader(group: GroupState, member_id: Optional[str]) -> bool:
    """Return True if member_id leads the group."""
    if member_id is None:
        return False
    if group.leader_id:
        return group.leader_id == member_id
    return bool(group.members) and group.members[0].member_id == member_id


def current_season(group: GroupState) -> Optional[Season]:
    """Return the active season, or None."""
    return group.current_season


def capture_baselines(group: GroupState) -> SeasonBaselines:
    """Snapshot every member's current portfolio value."""
    values = {
        m.member_id: member_metrics(m, group.holdings).portfolio_value
        for m in group.members
    }
    return SeasonBaselines(values, group.member_ids)


def start_season(
    group: GroupState,
    caller_id: str,
    at: Optional[datetime] = None,
) -> OperationResult[Season]:
    """
    Open a new season led by caller_id.

    Captures each member's current value as their season baseline and
    prepends a SEASON_STARTED activity.
    """
    if not is_group_leader(group, caller_id):
        logger.warning("Member %s is not the leader of group %s; season not started", caller_id, group.group_id)
        return OperationResult.fail(
            FailureReason.UNAUTHORIZED,
            "Only the group leader can start a new season",
        )

    if group.current_season is not None:
        logger.warning("Group %s already has an active season", group.group_id)
        return OperationResult.fail(
            FailureReason.SEASON_ALREADY_ACTIVE,
            "There is already an active season. End it first.",
        )

    started_at = at or now_eastern()
    number = len(group.seasons) + 1
    season = Season(
        season_id=f"season_{number}",
        name=f"Season {number}",
        start_time=started_at,
        leader_id=caller_id,
        member_snapshots=capture_baselines(group),
    )

    group.seasons.append(season)
    group.current_season_id = season.season_id
    if not group.leader_id:
        group.leader_id = caller_id

    group.log(
        ActivityEvent(
            event_id=str(uuid.uuid4()),
            timestamp=started_at,
            event_type=ActivityType.SEASON_STARTED,
            member_id=caller_id,
            title=f"{season.name} started",
            description=f"New season started with {len(group.members)} investors competing.",
        )
    )
    logger.info("%s started in group %s by %s", season.name, group.group_id, caller_id)
    return OperationResult.success(season)


def end_season(
    group: GroupState,
    caller_id: str,
    at: Optional[datetime] = None,
) -> OperationResult[Season]:
    """Conclude the active season and prepend a SEASON_ENDED activity."""
    season = group.current_season
    if season is None:
        logger.warning("Group %s has no active season to end", group.group_id)
        return OperationResult.fail(
            FailureReason.NO_ACTIVE_SEASON,
            "No active season to end",
        )

    if not is_group_leader(group, caller_id):
        logger.warning("Member %s is not the leader of group %s; season not ended", caller_id, group.group_id)
        return OperationResult.fail(
            FailureReason.UNAUTHORIZED,
            "Only the group leader can end a season",
        )

    ended_at = at or now_eastern()
    season.end_time = ended_at
    group.current_season_id = None

    group.log(
        ActivityEvent(
            event_id=str(uuid.uuid4()),
            timestamp=ended_at,
            event_type=ActivityType.SEASON_ENDED,
            member_id=caller_id,
            title=f"{season.name} ended",
            description="The current season has been concluded.",
        )
    )
    logger.info("%s ended in group %s by %s", season.name, group.group_id, caller_id)
    return OperationResult.success(season)
