"""Group aggregate root."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from league.domain.models.activity import ActivityEvent
from league.domain.models.holding import Holding
from league.domain.models.member import Member
from league.domain.models.season import Season
from league.domain.models.snapshot import PortfolioSnapshot


@dataclass
class GroupState:
    """
    A group and everything it owns: members, holdings, activity, history, seasons.

    Activity is kept newest-first. Nothing inside a group references another group.
    """

    group_id: str
    name: str
    members: list[Member] = field(default_factory=list)
    holdings: list[Holding] = field(default_factory=list)
    activity: list[ActivityEvent] = field(default_factory=list)
    snapshots: list[PortfolioSnapshot] = field(default_factory=list)
    leader_id: Optional[str] = None
    current_season_id: Optional[str] = None
    seasons: list[Season] = field(default_factory=list)
    created_at: Optional[datetime] = field(default=None)

    def find_member(self, member_id: Optional[str]) -> Optional[Member]:
        """Return the member with the given id, or None."""
        return next((m for m in self.members if m.member_id == member_id), None)

    def find_holding(self, holding_id: str) -> Optional[Holding]:
        """Return the holding with the given id, or None."""
        return next((h for h in self.holdings if h.holding_id == holding_id), None)

    def holdings_for(self, member_id: str) -> list[Holding]:
        """Return the holdings owned by one member."""
        return [h for h in self.holdings if h.member_id == member_id]

    def find_season(self, season_id: Optional[str]) -> Optional[Season]:
        return next((s for s in self.seasons if s.season_id == season_id), None)

    @property
    def current_season(self) -> Optional[Season]:
        """The active season, if one is running."""
        if not self.current_season_id:
            return None
        return self.find_season(self.current_season_id)

    @property
    def member_ids(self) -> list[str]:
        return [m.member_id for m in self.members]

    def log(self, event: ActivityEvent) -> None:
        """Prepend an activity event (activity is newest-first)."""
        self.activity.insert(0, event)
