"""API routers package."""

from league.api.routers.groups import router as groups_router
from league.api.routers.members import router as members_router
from league.api.routers.holdings import router as holdings_router
from league.api.routers.seasons import router as seasons_router
from league.api.routers.metrics import router as metrics_router

__all__ = [
    "groups_router",
    "members_router",
    "holdings_router",
    "seasons_router",
    "metrics_router",
]
