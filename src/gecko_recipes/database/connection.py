"""PostgreSQL connection pool management.

This module provides:
- Async connection pool management via asyncpg
- Connection lifecycle management via lifespan events
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import asyncpg

from gecko_recipes.core.config import get_settings
from gecko_recipes.observability.logging import get_logger


if TYPE_CHECKING:
    from asyncpg import Pool

    from gecko_recipes.core.config import Settings

logger = get_logger(__name__)

# Global connection pool
_pool: Pool | None = None


async def init_database_pool(settings: Settings | None = None) -> Pool:
    """Initialize the PostgreSQL connection pool.

    Should be called during application startup (lifespan).

    Args:
        settings: Optional settings override. If not provided, uses get_settings().

    Returns:
        The initialized pool.
    """
    global _pool  # noqa: PLW0603

    if settings is None:
        settings = get_settings()

    logger.info(
        "Initializing database connection pool",
        host=settings.database.host,
        port=settings.database.port,
        database=settings.database.name,
        dsn_override=settings.DATABASE_URL is not None,
    )

    pool = await asyncpg.create_pool(
        dsn=settings.database_dsn,
        password=settings.DATABASE_PASSWORD or None,
        min_size=settings.database.min_pool_size,
        max_size=settings.database.max_pool_size,
        command_timeout=settings.database.command_timeout,
        ssl=True if settings.database.ssl else None,
    )

    try:
        async with pool.acquire() as conn:
            await conn.fetchval("SELECT 1")
    except (asyncpg.PostgresError, OSError):
        logger.exception("Failed to connect to database")
        await pool.close()
        raise

    _pool = pool
    logger.info("Database connection established successfully")
    return pool


async def close_database_pool() -> None:
    """Close the PostgreSQL connection pool.

    Should be called during application shutdown (lifespan).
    """
    global _pool  # noqa: PLW0603

    if _pool is None:
        return

    logger.info("Closing database connection pool")
    await _pool.close()
    _pool = None
    logger.info("Database connection pool closed")


def get_database_pool() -> Pool:
    """Get the database connection pool.

    Returns:
        PostgreSQL connection pool.

    Raises:
        RuntimeError: If pool is not initialized.
    """
    if _pool is None:
        msg = "Database pool not initialized. Call init_database_pool() first."
        raise RuntimeError(msg)
    return _pool


async def check_database_health() -> dict[str, str]:
    """Check health of database connection.

    Returns:
        Dictionary with health status.
    """
    if _pool is None:
        return {"database": "not_initialized"}

    try:
        async with _pool.acquire() as conn:
            await conn.fetchval("SELECT 1")
    except (asyncpg.PostgresError, asyncpg.InterfaceError, OSError, TimeoutError):
        logger.opt(exception=True).warning("Database health check failed")
        return {"database": "unhealthy"}

    return {"database": "healthy"}
