"""Repository protocol definitions (interfaces)."""

from league.repositories.protocols.group_repo import GroupRepository

__all__ = [
    "GroupRepository",
]
