"""Group repository protocol."""

from typing import Protocol, Optional

from league.domain.models import GroupState


class GroupRepository(Protocol):
    """
    Interface for group aggregate persistence.

    A group is always loaded and saved whole; the services never reach a
    storage mechanism directly.
    """

    def load(self, group_id: str) -> Optional[GroupState]:
        """Retrieve a group with all its members, holdings, activity, history and seasons."""
        ...

    def save(self, group: GroupState) -> GroupState:
        """Persist the full state of a group (insert or replace)."""
        ...

    def get_by_name(self, name: str) -> Optional[GroupState]:
        """Retrieve a group by its name (case-insensitive)."""
        ...

    def list_all(self) -> list[GroupState]:
        """List all groups."""
        ...

    def delete(self, group_id: str) -> None:
        """Delete a group and everything it owns."""
        ...
