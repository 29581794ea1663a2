"""Observability components: logging and metrics."""

from gecko_recipes.observability.logging import (
    bind_context,
    clear_context,
    get_logger,
    logger,
    request_context,
    setup_logging,
)
from gecko_recipes.observability.metrics import setup_metrics


__all__ = [
    "bind_context",
    "clear_context",
    "get_logger",
    "logger",
    "request_context",
    "setup_logging",
    "setup_metrics",
]
