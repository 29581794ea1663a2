"""Integration test fixtures.

Provides a real PostgreSQL via testcontainers with the schema migrated once
per session and the tables truncated before each test.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import asyncpg
import pytest
from httpx import ASGITransport, AsyncClient
from testcontainers.postgres import PostgresContainer

from gecko_recipes.database import PostgresRecipeRepository, apply_migrations
from gecko_recipes.factory import create_app
from gecko_recipes.services.recipe import RecipeService


if TYPE_CHECKING:
    from collections.abc import AsyncGenerator, Generator

    from asyncpg import Pool
    from fastapi import FastAPI

    from gecko_recipes.core.config import Settings


pytestmark = pytest.mark.integration


@pytest.fixture(scope="session")
def postgres_container() -> Generator[PostgresContainer]:
    """Start a PostgreSQL container for the test session."""
    with PostgresContainer("postgres:16-alpine", driver=None) as postgres:
        yield postgres


@pytest.fixture(scope="session")
def database_url(postgres_container: PostgresContainer) -> str:
    """Get an asyncpg-compatible URL for the container."""
    return postgres_container.get_connection_url()


@pytest.fixture
async def pool(database_url: str) -> AsyncGenerator[Pool]:
    """Create a pool on the migrated database with empty tables."""
    pool = await asyncpg.create_pool(dsn=database_url, min_size=1, max_size=4)
    try:
        await apply_migrations(pool)
        await pool.execute(
            "TRUNCATE ingredient, recipe RESTART IDENTITY CASCADE"
        )
        yield pool
    finally:
        await pool.close()


@pytest.fixture
def repository(pool: Pool) -> PostgresRecipeRepository:
    """Create the repository under test."""
    return PostgresRecipeRepository(pool)


@pytest.fixture
def app(test_settings: Settings, repository: PostgresRecipeRepository) -> FastAPI:
    """Create the app with the service over the real repository."""
    application = create_app(test_settings)
    application.state.recipe_service = RecipeService(repository)
    return application


@pytest.fixture
async def client(app: FastAPI) -> AsyncGenerator[AsyncClient]:
    """Create async HTTP client for testing."""
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac
