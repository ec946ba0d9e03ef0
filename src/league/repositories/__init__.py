"""Repository layer - data access abstractions and implementations."""

from league.repositories.protocols import GroupRepository

__all__ = [
    "GroupRepository",
]
