"""FastAPI dependencies for service access.

Services are created during application startup and stored in app.state.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import Request

from gecko_recipes.core.exceptions import ServiceUnavailableException


if TYPE_CHECKING:
    from gecko_recipes.services.recipe import RecipeService


async def get_recipe_service(request: Request) -> RecipeService:
    """Get the recipe service from app state.

    Args:
        request: The incoming request.

    Returns:
        Initialized RecipeService.

    Raises:
        ServiceUnavailableException: 503 if the service is not initialized.
    """
    service: RecipeService | None = getattr(request.app.state, "recipe_service", None)
    if service is None:
        msg = "Recipe service not available"
        raise ServiceUnavailableException(msg)
    return service
