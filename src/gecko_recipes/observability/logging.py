"""Loguru setup for the recipe service.

Every record carries the service name and environment. Fields bound for the
current request (the request id) are merged into each record by a patcher,
so the JSON sink and the console format both see them. Standard library
loggers (uvicorn, asyncpg) are routed into Loguru.
"""

from __future__ import annotations

import inspect
import logging
import sys
import traceback
from contextvars import ContextVar
from typing import TYPE_CHECKING

import orjson
from loguru import logger


if TYPE_CHECKING:
    from typing import Any

    from loguru import Message, Record

    from gecko_recipes.core.config.settings import LoggingSettings


_request_fields: ContextVar[dict[str, Any]] = ContextVar("request_fields", default={})

# uvicorn.access duplicates the API access line
_QUIETED_LOGGERS = ("uvicorn.access", "asyncpg", "httpx", "httpcore")

# Set once per process; not repeated on console lines
_STATIC_FIELDS = frozenset({"name", "service", "environment"})


class InterceptHandler(logging.Handler):
    """Route standard library records into Loguru."""

    def emit(self, record: logging.LogRecord) -> None:
        """Re-emit ``record`` through Loguru at the caller's depth."""
        level: str | int
        try:
            level = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        frame, depth = inspect.currentframe(), 0
        while frame and (depth == 0 or frame.f_code.co_filename == logging.__file__):
            frame = frame.f_back
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(
            level, record.getMessage()
        )


def _attach_request_fields(record: Record) -> None:
    record["extra"].update(_request_fields.get())


def render_json(record: Record) -> bytes:
    """Serialize one record as a newline-terminated JSON object."""
    extra = dict(record["extra"])
    payload: dict[str, Any] = {
        "timestamp": record["time"].isoformat(),
        "level": record["level"].name,
        "logger": extra.pop("name", record["name"]),
        "message": record["message"],
        "location": f"{record['function']}:{record['line']}",
        **extra,
    }

    error = record["exception"]
    if error is not None and error.type is not None:
        payload["error"] = {
            "type": error.type.__name__,
            "detail": str(error.value),
            "traceback": "".join(
                traceback.format_exception(error.type, error.value, error.traceback)
            ),
        }

    return orjson.dumps(payload, default=str, option=orjson.OPT_APPEND_NEWLINE)


def _write_json(message: Message) -> None:
    sys.stdout.write(render_json(message.record).decode())
    sys.stdout.flush()


def _escape_markup(text: str) -> str:
    return (
        text.replace("{", "{{").replace("}", "}}").replace("<", r"\<")
    )


def console_format(record: Record) -> str:
    """Loguru format template for local development."""
    fields = " ".join(
        f"{key}={value}"
        for key, value in record["extra"].items()
        if key not in _STATIC_FIELDS and value is not None
    )
    suffix = f" <dim>{_escape_markup(fields)}</dim>" if fields else ""
    return (
        "<green>{time:HH:mm:ss.SSS}</green> <level>{level: <7}</level> "
        "<cyan>{name}</cyan> {message}" + suffix + "\n{exception}"
    )


def setup_logging(
    config: LoggingSettings,
    *,
    service: str,
    environment: str,
    console: bool = False,
) -> None:
    """Replace Loguru's default sink with the service's sink.

    Args:
        config: Level and format (``json`` or ``text``).
        service: Service name stamped on every record.
        environment: Deployment environment stamped on every record.
        console: Force the colorized console format regardless of ``config``.
    """
    logger.remove()
    logger.configure(
        extra={"service": service, "environment": environment},
        patcher=_attach_request_fields,
    )

    level = config.level.upper()
    if config.format == "json" and not console:
        # Local variables are never rendered into JSON output
        logger.add(_write_json, level=level, backtrace=False, diagnose=False)
    else:
        logger.add(
            sys.stdout,
            format=console_format,
            level=level,
            colorize=True,
            diagnose=True,
        )

    logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)
    for name in _QUIETED_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str) -> Any:
    """Return the Loguru logger bound to a module name."""
    return logger.bind(name=name)


def bind_context(**fields: Any) -> None:
    """Add fields to every record logged later in the current request."""
    _request_fields.set({**_request_fields.get(), **fields})


def clear_context() -> None:
    """Drop all request fields."""
    _request_fields.set({})


def request_context() -> dict[str, Any]:
    """Copy of the fields bound for the current request."""
    return dict(_request_fields.get())


__all__ = [
    "InterceptHandler",
    "bind_context",
    "clear_context",
    "console_format",
    "get_logger",
    "logger",
    "render_json",
    "request_context",
    "setup_logging",
]
