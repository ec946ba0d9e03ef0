"""SQLAlchemy repository implementations."""

from league.repositories.sqlalchemy.database import (
    get_engine,
    get_session_factory,
    get_db,
    get_session,
    init_db,
    reset_database,
    Base,
)
from league.repositories.sqlalchemy.group_repo import SqlAlchemyGroupRepository

__all__ = [
    "get_engine",
    "get_session_factory",
    "get_db",
    "get_session",
    "init_db",
    "reset_database",
    "Base",
    "SqlAlchemyGroupRepository",
]
