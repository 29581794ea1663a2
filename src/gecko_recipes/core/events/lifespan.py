"""Application lifespan event handlers.

This module defines the lifespan context manager that handles:
- Application startup: configure logging, open the database pool, apply
  migrations and build the recipe service
- Application shutdown: close the database pool
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

from gecko_recipes.core.config import Settings, get_settings
from gecko_recipes.database import (
    PostgresRecipeRepository,
    apply_migrations,
    close_database_pool,
    init_database_pool,
)
from gecko_recipes.observability.logging import get_logger, setup_logging
from gecko_recipes.services.recipe import RecipeService


if TYPE_CHECKING:
    from collections.abc import AsyncGenerator

    from fastapi import FastAPI

logger = get_logger(__name__)


def _app_settings(app: FastAPI) -> Settings:
    """Settings the app was created with, falling back to the cached ones."""
    settings = getattr(app.state, "settings", None)
    if isinstance(settings, Settings):
        return settings
    return get_settings()


async def _startup(app: FastAPI, settings: Settings) -> None:
    """Initialize all application services during startup.

    The database is required: a failure to connect or migrate aborts
    startup.
    """
    setup_logging(
        settings.logging,
        service=settings.app.name,
        environment=settings.APP_ENV,
        console=settings.is_development,
    )

    logger.info(
        "Starting application",
        app_name=settings.app.name,
        environment=settings.APP_ENV,
        debug=settings.app.debug,
    )

    pool = await init_database_pool(settings)

    if settings.database.run_migrations:
        applied = await apply_migrations(pool)
        if applied:
            logger.info("Database migrations applied", versions=applied)

    app.state.recipe_service = RecipeService(PostgresRecipeRepository(pool))

    logger.info("Application startup complete")


async def _shutdown(app: FastAPI) -> None:
    """Shutdown all application services."""
    logger.info("Shutting down application")

    app.state.recipe_service = None
    await close_database_pool()

    logger.info("Application shutdown complete")


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
    """Manage application lifespan events.

    Args:
        app: The FastAPI application instance.

    Yields:
        None - control returns to the application to handle requests.
    """
    settings = _app_settings(app)
    await _startup(app, settings)
    try:
        yield
    finally:
        await _shutdown(app)
