"""Unit tests for request middleware.

Tests cover:
- Request ID generation and propagation
- Process time header and slow request warning
- Access line content, level and path exclusion
"""

from __future__ import annotations

from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from gecko_recipes.core.middleware import (
    LoggingMiddleware,
    RequestIDMiddleware,
    TimingMiddleware,
)


pytestmark = pytest.mark.unit


def _request(headers: dict[str, str] | None = None, path: str = "/api/v1/recipes"):
    request = MagicMock()
    request.headers = headers or {}
    request.state = MagicMock()
    request.method = "GET"
    request.url.path = path
    request.query_params = {}
    request.client.host = "10.0.0.1"
    request.scope = {}
    return request


def _response() -> MagicMock:
    response = MagicMock()
    response.headers = {}
    response.status_code = 200
    return response


class TestRequestIDMiddleware:
    """Tests for RequestIDMiddleware."""

    @pytest.mark.asyncio
    async def test_generates_request_id_when_missing(self) -> None:
        """Should generate an id, store it on state and return it."""
        middleware = RequestIDMiddleware(MagicMock())
        request = _request()

        with patch("gecko_recipes.core.middleware.request_id.bind_context") as bind:
            result = await middleware.dispatch(
                request, AsyncMock(return_value=_response())
            )

        request_id = result.headers["X-Request-ID"]
        assert request.state.request_id == request_id
        bind.assert_called_once_with(request_id=request_id)

    @pytest.mark.asyncio
    async def test_propagates_existing_request_id(self) -> None:
        """Should reuse the incoming header value."""
        middleware = RequestIDMiddleware(MagicMock())
        request = _request({"X-Request-ID": "existing-123"})

        result = await middleware.dispatch(request, AsyncMock(return_value=_response()))

        assert result.headers["X-Request-ID"] == "existing-123"
        assert request.state.request_id == "existing-123"


class TestTimingMiddleware:
    """Tests for TimingMiddleware."""

    @pytest.mark.asyncio
    async def test_adds_process_time_header(self) -> None:
        """Should add the elapsed time in milliseconds."""
        middleware = TimingMiddleware(MagicMock())

        result = await middleware.dispatch(
            _request(), AsyncMock(return_value=_response())
        )

        assert result.headers["X-Process-Time"].endswith("ms")

    @pytest.mark.asyncio
    async def test_warns_on_slow_request(self) -> None:
        """Should log a warning above the threshold."""
        middleware = TimingMiddleware(MagicMock(), slow_threshold=-1.0)

        with patch("gecko_recipes.core.middleware.timing.logger") as logger:
            await middleware.dispatch(_request(), AsyncMock(return_value=_response()))

        logger.warning.assert_called_once()


class TestLoggingMiddleware:
    """Tests for LoggingMiddleware."""

    @pytest.mark.asyncio
    async def test_logs_route_template_and_recipe_id(self) -> None:
        """Should log one line with the matched route and recipe id."""
        middleware = LoggingMiddleware(MagicMock())
        request = _request(path="/api/v1/recipes/7")
        request.method = "PUT"
        request.scope = {
            "route": SimpleNamespace(path="/api/v1/recipes/{recipe_id}"),
            "path_params": {"recipe_id": 7},
        }

        with patch("gecko_recipes.core.middleware.logging.logger") as logger:
            await middleware.dispatch(request, AsyncMock(return_value=_response()))

        logger.log.assert_called_once()
        level, template = logger.log.call_args.args
        fields = logger.log.call_args.kwargs
        assert level == "INFO"
        assert template == "{method} {route} {status_code}"
        assert fields["method"] == "PUT"
        assert fields["route"] == "/api/v1/recipes/{recipe_id}"
        assert fields["recipe_id"] == 7
        assert fields["client"] == "10.0.0.1"
        assert fields["duration_ms"] >= 0

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        ("status_code", "level"),
        [(201, "INFO"), (404, "WARNING"), (422, "WARNING"), (500, "ERROR")],
    )
    async def test_level_follows_status(self, status_code: int, level: str) -> None:
        """Should warn on client errors and error on server errors."""
        middleware = LoggingMiddleware(MagicMock())
        response = _response()
        response.status_code = status_code

        with patch("gecko_recipes.core.middleware.logging.logger") as logger:
            await middleware.dispatch(_request(), AsyncMock(return_value=response))

        assert logger.log.call_args.args[0] == level

    @pytest.mark.asyncio
    async def test_unmatched_path_falls_back_to_url(self) -> None:
        """Should log the raw path when no route matched."""
        middleware = LoggingMiddleware(MagicMock())
        request = _request(path="/api/v1/nowhere")
        request.scope = {}

        with patch("gecko_recipes.core.middleware.logging.logger") as logger:
            await middleware.dispatch(request, AsyncMock(return_value=_response()))

        assert logger.log.call_args.kwargs["route"] == "/api/v1/nowhere"
        assert logger.log.call_args.kwargs["recipe_id"] is None

    @pytest.mark.asyncio
    async def test_logs_and_reraises_handler_errors(self) -> None:
        """Should log a 500 line and let the error reach the outer handler."""
        middleware = LoggingMiddleware(MagicMock())

        with (
            patch("gecko_recipes.core.middleware.logging.logger") as logger,
            pytest.raises(RuntimeError),
        ):
            await middleware.dispatch(
                _request(), AsyncMock(side_effect=RuntimeError("boom"))
            )

        assert logger.log.call_args.args[0] == "ERROR"
        assert logger.log.call_args.kwargs["status_code"] == 500

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "path", ["/api/v1/health", "/api/v1/ready", "/api/v1/metrics", "/docs"]
    )
    async def test_skips_quiet_and_non_api_paths(self, path: str) -> None:
        """Should not log health, readiness, metrics or non-API paths."""
        middleware = LoggingMiddleware(MagicMock())

        with patch("gecko_recipes.core.middleware.logging.logger") as logger:
            await middleware.dispatch(
                _request(path=path), AsyncMock(return_value=_response())
            )

        logger.log.assert_not_called()

    def test_quiet_paths_follow_prefix(self) -> None:
        """Should derive the quiet paths from the configured prefix."""
        middleware = LoggingMiddleware(MagicMock(), api_prefix="/recipes-api/")

        assert middleware.is_logged("/recipes-api/recipes")
        assert not middleware.is_logged("/recipes-api/health")
        assert not middleware.is_logged("/api/v1/recipes")
