"""Season service: season lifecycle with persistence."""

from datetime import datetime
from typing import Optional

from league.core.exceptions import NotFoundError
from league.core.results import OperationResult
from league.domain.models import GroupState, Season
from league.repositories.protocols import GroupRepository
from league.services import season_ledger


class SeasonService:
    """
    Loads a group, runs a season transition on it and saves it on success.

    The transition rules themselves live in season_ledger.
    """

    def __init__(self, group_repo: GroupRepository):
        self._group_repo = group_repo

    def _load(self, group_id: str) -> GroupState:
        group = self._group_repo.load(group_id)
        if group is None:
            raise NotFoundError("Group", group_id)
        return group

    def is_group_leader(self, group_id: str, member_id: Optional[str]) -> bool:
        return season_ledger.is_group_leader(self._load(group_id), member_id)

    def get_current_season(self, group_id: str) -> Optional[Season]:
        return season_ledger.current_season(self._load(group_id))

    def list_seasons(self, group_id: str) -> list[Season]:
        """Return every season of the group, oldest first."""
        return list(self._load(group_id).seasons)

    def start_season(
        self,
        group_id: str,
        caller_id: str,
        at: Optional[datetime] = None,
    ) -> OperationResult[Season]:
        group = self._load(group_id)
        result = season_ledger.start_season(group, caller_id, at=at)
        if result.ok:
            self._group_repo.save(group)
        return result

    def end_season(
        self,
        group_id: str,
        caller_id: str,
        at: Optional[datetime] = None,
    ) -> OperationResult[Season]:
        group = self._load(group_id)
        result = season_ledger.end_season(group, caller_id, at=at)
        if result.ok:
            self._group_repo.save(group)
        return result
