"""Schema migrations.

Applies the ordered ``NNNN_name.sql`` files shipped in
``gecko_recipes.database.migrations``. Applied versions are recorded in
``schema_migrations``; each file runs in its own transaction. A session
advisory lock serializes concurrent workers starting at the same time.
"""

from __future__ import annotations

from importlib import resources
from typing import TYPE_CHECKING

from gecko_recipes.observability.logging import get_logger


if TYPE_CHECKING:
    from asyncpg import Pool

logger = get_logger(__name__)

MIGRATIONS_PACKAGE = "gecko_recipes.database.migrations"

# Arbitrary application-wide key for pg_advisory_lock
MIGRATION_LOCK_KEY = 7_141_295_024

_CREATE_MIGRATIONS_TABLE = """
    CREATE TABLE IF NOT EXISTS schema_migrations (
        version TEXT PRIMARY KEY,
        applied_at TIMESTAMPTZ NOT NULL DEFAULT now()
    )
"""


def load_migrations() -> list[tuple[str, str]]:
    """Return ``(version, sql)`` pairs sorted by version.

    The version is the file name without the ``.sql`` suffix.
    """
    migrations = [
        (entry.name.removesuffix(".sql"), entry.read_text(encoding="utf-8"))
        for entry in resources.files(MIGRATIONS_PACKAGE).iterdir()
        if entry.name.endswith(".sql")
    ]
    return sorted(migrations)


async def apply_migrations(pool: Pool) -> list[str]:
    """Apply every migration that has not been recorded yet.

    Args:
        pool: asyncpg connection pool.

    Returns:
        Versions applied by this call, in order.
    """
    applied_now: list[str] = []

    async with pool.acquire() as conn:
        await conn.execute("SELECT pg_advisory_lock($1)", MIGRATION_LOCK_KEY)
        try:
            await conn.execute(_CREATE_MIGRATIONS_TABLE)
            rows = await conn.fetch("SELECT version FROM schema_migrations")
            already_applied = {row["version"] for row in rows}

            for version, sql in load_migrations():
                if version in already_applied:
                    continue
                async with conn.transaction():
                    await conn.execute(sql)
                    await conn.execute(
                        "INSERT INTO schema_migrations (version) VALUES ($1)",
                        version,
                    )
                applied_now.append(version)
                logger.info("Applied migration", version=version)
        finally:
            await conn.execute("SELECT pg_advisory_unlock($1)", MIGRATION_LOCK_KEY)

    if not applied_now:
        logger.debug("Database schema is up to date")

    return applied_now
