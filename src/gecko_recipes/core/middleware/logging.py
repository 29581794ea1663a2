"""Recipe API access log.

Each request under the API prefix produces a single line once the response
is ready, e.g. ``PUT /api/v1/recipes/{recipe_id} 404``, with the recipe id,
client and duration as structured fields. The health, readiness and metrics
routes and paths outside the API are not logged.
"""

from __future__ import annotations

import time
from typing import TYPE_CHECKING

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint

from gecko_recipes.observability.logging import get_logger


if TYPE_CHECKING:
    from collections.abc import Iterable

    from starlette.requests import Request
    from starlette.responses import Response
    from starlette.types import ASGIApp

logger = get_logger(__name__)

QUIET_ROUTES = ("/health", "/ready", "/metrics")


def _level_for(status_code: int) -> str:
    if status_code >= 500:
        return "ERROR"
    if status_code >= 400:
        return "WARNING"
    return "INFO"


class LoggingMiddleware(BaseHTTPMiddleware):
    """Log one completion line per recipe API request."""

    def __init__(
        self,
        app: ASGIApp,
        *,
        api_prefix: str = "/api/v1",
        quiet_routes: Iterable[str] = QUIET_ROUTES,
    ) -> None:
        super().__init__(app)
        self.api_prefix = api_prefix.rstrip("/")
        self.quiet_paths = frozenset(f"{self.api_prefix}{r}" for r in quiet_routes)

    def is_logged(self, path: str) -> bool:
        """Whether requests to ``path`` get an access line."""
        return path.startswith(self.api_prefix) and path not in self.quiet_paths

    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        """Run the request and log its outcome."""
        if not self.is_logged(request.url.path):
            return await call_next(request)

        start = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception:
            # The outer error handler answers 500
            self._log(request, 500, start)
            raise

        self._log(request, response.status_code, start)
        return response

    def _log(self, request: Request, status_code: int, start: float) -> None:
        # Routing fills these into the shared scope during call_next
        route = request.scope.get("route")
        path_params = request.scope.get("path_params") or {}

        logger.log(
            _level_for(status_code),
            "{method} {route} {status_code}",
            method=request.method,
            route=getattr(route, "path", request.url.path),
            status_code=status_code,
            recipe_id=path_params.get("recipe_id"),
            client=request.client.host if request.client else None,
            duration_ms=round((time.perf_counter() - start) * 1000, 2),
        )
