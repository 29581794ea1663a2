"""Custom middleware components."""

from gecko_recipes.core.middleware.logging import LoggingMiddleware
from gecko_recipes.core.middleware.request_id import RequestIDMiddleware
from gecko_recipes.core.middleware.timing import TimingMiddleware


__all__ = [
    "LoggingMiddleware",
    "RequestIDMiddleware",
    "TimingMiddleware",
]
