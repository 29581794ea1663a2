"""Application factory for creating FastAPI instances.

This module provides the create_app factory function that:
- Configures the FastAPI application with appropriate settings
- Sets up middleware stack in the correct order
- Registers exception handlers
- Mounts API routers
- Exposes Prometheus metrics
"""

from __future__ import annotations

from fastapi import FastAPI

from gecko_recipes.api.v1.router import router as v1_router
from gecko_recipes.core.config import Settings, get_settings
from gecko_recipes.core.events import lifespan
from gecko_recipes.core.exceptions import setup_exception_handlers
from gecko_recipes.core.middleware import (
    LoggingMiddleware,
    RequestIDMiddleware,
    TimingMiddleware,
)
from gecko_recipes.observability.metrics import setup_metrics


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create and configure a FastAPI application instance.

    Args:
        settings: Optional settings override. If not provided, uses get_settings().

    Returns:
        Configured FastAPI application instance.
    """
    if settings is None:
        settings = get_settings()

    app = FastAPI(
        title=settings.app.name,
        version=settings.app.version,
        description="Store, update and search recipes with ordered ingredients",
        lifespan=lifespan,
        docs_url="/docs" if settings.is_development else None,
        redoc_url="/redoc" if settings.is_development else None,
        openapi_url="/openapi.json" if settings.is_development else None,
        debug=settings.app.debug,
    )

    # Read by the lifespan and the health endpoints
    app.state.settings = settings
    app.state.recipe_service = None

    setup_exception_handlers(app)
    _setup_middleware(app, settings)
    app.include_router(v1_router, prefix=settings.api.v1_prefix)

    # After routes are mounted
    setup_metrics(app, settings)

    return app


def _setup_middleware(app: FastAPI, settings: Settings) -> None:
    """Configure middleware stack.

    Middleware is executed in reverse order of addition. Order from the
    request perspective:
    1. RequestIDMiddleware (binds the request id for every later log line)
    2. TimingMiddleware (measures request time)
    3. LoggingMiddleware (one access line per API request)
    """
    app.add_middleware(LoggingMiddleware, api_prefix=settings.api.v1_prefix)
    app.add_middleware(TimingMiddleware)
    app.add_middleware(RequestIDMiddleware)
