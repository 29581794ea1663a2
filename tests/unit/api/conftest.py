"""HTTP layer test fixtures.

The app is served through ``httpx.ASGITransport``, which does not run the
lifespan, so the recipe service is installed on ``app.state`` directly.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest
from httpx import ASGITransport, AsyncClient

from gecko_recipes.factory import create_app
from gecko_recipes.services.recipe import RecipeService
from tests.fakes import InMemoryRecipeRepository


if TYPE_CHECKING:
    from collections.abc import AsyncGenerator

    from fastapi import FastAPI

    from gecko_recipes.core.config import Settings


@pytest.fixture
def repository() -> InMemoryRecipeRepository:
    """Create an empty in-memory repository."""
    return InMemoryRecipeRepository()


@pytest.fixture
def app(test_settings: Settings, repository: InMemoryRecipeRepository) -> FastAPI:
    """Create the app with the recipe service over the fake repository."""
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
