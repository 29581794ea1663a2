"""Recipe endpoints.

Provides:
- GET /recipes for listing every recipe
- GET /recipes/search for filtering by recipe name, ingredient name and meal type
- POST /recipes for creating a recipe
- PUT /recipes/{recipe_id} for replacing a recipe
- DELETE /recipes/{recipe_id} for deleting a recipe
"""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Path, Query, status
from starlette.responses import Response

from gecko_recipes.api.dependencies import get_recipe_service
from gecko_recipes.core.exceptions import (
    InternalServerException,
    NotFoundException,
)
from gecko_recipes.mappers import (
    build_new_recipe,
    build_recipe,
    build_recipe_response,
    build_search_criteria,
)
from gecko_recipes.observability.logging import get_logger
from gecko_recipes.schemas import (
    CreateRecipeRequest,
    MealType,
    RecipeResponse,
    UpdateRecipeRequest,
)
from gecko_recipes.schemas.recipe import NO_NUL_PATTERN
from gecko_recipes.services.recipe import (
    RecipeNotFoundError,
    RecipeService,
    RecipeServiceError,
)


logger = get_logger(__name__)

router = APIRouter(tags=["Recipes"])

_ERROR_RESPONSES: dict[int | str, dict[str, str]] = {
    422: {"description": "Request validation error"},
    500: {"description": "Recipe store failure"},
    503: {"description": "Service unavailable"},
}

_NOT_FOUND_RESPONSE: dict[int | str, dict[str, str]] = {
    404: {"description": "Recipe not found"},
}

RecipeServiceDep = Annotated[RecipeService, Depends(get_recipe_service)]
RecipeIdPath = Annotated[int, Path(description="Recipe id")]


def _store_failure(error: RecipeServiceError) -> InternalServerException:
    logger.error("Recipe operation failed", error=str(error))
    return InternalServerException()


@router.get(
    "/recipes",
    response_model=list[RecipeResponse],
    summary="List recipes",
    description="Returns every stored recipe with its ingredients in order.",
    responses=_ERROR_RESPONSES,
)
async def list_recipes(service: RecipeServiceDep) -> list[RecipeResponse]:
    """List all recipes."""
    try:
        recipes = await service.list_recipes()
    except RecipeServiceError as e:
        raise _store_failure(e) from e

    return [build_recipe_response(recipe) for recipe in recipes]


@router.get(
    "/recipes/search",
    response_model=list[RecipeResponse],
    summary="Search recipes",
    description=(
        "Returns recipes matching every provided filter. Name filters are "
        "case-insensitive substring matches; an omitted filter matches all."
    ),
    responses=_ERROR_RESPONSES,
)
async def search_recipes(
    service: RecipeServiceDep,
    recipe_name: Annotated[
        str | None,
        Query(
            alias="recipeName",
            pattern=NO_NUL_PATTERN,
            description="Substring of the recipe name",
        ),
    ] = None,
    ingredient_name: Annotated[
        str | None,
        Query(
            alias="ingredientName",
            pattern=NO_NUL_PATTERN,
            description="Substring of any ingredient name",
        ),
    ] = None,
    meal_type: Annotated[
        MealType | None,
        Query(alias="mealType", description="Exact meal type"),
    ] = None,
) -> list[RecipeResponse]:
    """Search recipes by name, ingredient and meal type."""
    criteria = build_search_criteria(recipe_name, ingredient_name, meal_type)

    try:
        recipes = await service.search_recipes(criteria)
    except RecipeServiceError as e:
        raise _store_failure(e) from e

    return [build_recipe_response(recipe) for recipe in recipes]


@router.post(
    "/recipes",
    response_model=RecipeResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a recipe",
    responses=_ERROR_RESPONSES,
)
async def create_recipe(
    request_body: CreateRecipeRequest,
    service: RecipeServiceDep,
) -> RecipeResponse:
    """Create a recipe and its ingredients.

    Ingredients are stored in the order they are submitted.
    """
    try:
        recipe = await service.create_recipe(build_new_recipe(request_body))
    except RecipeServiceError as e:
        raise _store_failure(e) from e

    return build_recipe_response(recipe)


@router.put(
    "/recipes/{recipe_id}",
    response_model=RecipeResponse,
    summary="Replace a recipe",
    description=(
        "Replaces every field of the recipe. The submitted ingredient list "
        "replaces the stored one in full."
    ),
    responses={**_NOT_FOUND_RESPONSE, **_ERROR_RESPONSES},
)
async def update_recipe(
    recipe_id: RecipeIdPath,
    request_body: UpdateRecipeRequest,
    service: RecipeServiceDep,
) -> RecipeResponse:
    """Replace a recipe."""
    try:
        recipe = await service.update_recipe(build_recipe(recipe_id, request_body))
    except RecipeNotFoundError as e:
        raise NotFoundException("Recipe", recipe_id) from e
    except RecipeServiceError as e:
        raise _store_failure(e) from e

    return build_recipe_response(recipe)


@router.delete(
    "/recipes/{recipe_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    summary="Delete a recipe",
    responses={**_NOT_FOUND_RESPONSE, **_ERROR_RESPONSES},
)
async def delete_recipe(
    recipe_id: RecipeIdPath,
    service: RecipeServiceDep,
) -> Response:
    """Delete a recipe and its ingredients."""
    try:
        await service.delete_recipe(recipe_id)
    except RecipeNotFoundError as e:
        raise NotFoundException("Recipe", recipe_id) from e
    except RecipeServiceError as e:
        raise _store_failure(e) from e

    return Response(status_code=status.HTTP_204_NO_CONTENT)
