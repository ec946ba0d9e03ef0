"""FastAPI application entry point."""

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from league.config.settings import get_settings
from league.config.logging_config import setup_logging
from league.repositories.sqlalchemy.database import init_db
from league.api.routers import (
    groups_router,
    members_router,
    holdings_router,
    seasons_router,
    metrics_router,
)
from league.core.exceptions import AppError, NotFoundError


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    setup_logging()
    init_db()
    yield


settings = get_settings()

app = FastAPI(
    title=settings.app_name,
    description="Group portfolio tracking with seasons, leaderboards and value history",
    version=settings.app_version,
    lifespan=lifespan,
)

app.include_router(groups_router)
app.include_router(members_router)
app.include_router(holdings_router)
app.include_router(seasons_router)
app.include_router(metrics_router)


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    """Global handler for application errors."""
    status_code = 404 if isinstance(exc, NotFoundError) else 400
    return JSONResponse(
        status_code=status_code,
        content={"error": exc.code, "message": exc.message},
    )


@app.get("/health")
def health_check() -> dict[str, str]:
    """Health check endpoint."""
    return {"status": "healthy"}


@app.get("/")
def root() -> dict[str, str]:
    """Root endpoint with API info."""
    return {
        "app": settings.app_name,
        "version": settings.app_version,
        "docs": "/docs",
    }
