"""Recipe-related data mappers.

Transforms recipe data between the HTTP schemas and the recipe service's
domain objects.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from gecko_recipes.schemas import (
    IngredientResponse,
    RecipeResponse,
)
from gecko_recipes.services.recipe import (
    Ingredient,
    MealType,
    NewRecipe,
    QuantityType,
    Recipe,
    SearchCriteria,
)


if TYPE_CHECKING:
    from gecko_recipes.schemas import CreateRecipeRequest, IngredientRequest
    from gecko_recipes.schemas.enums import MealType as MealTypeSchema


def _build_ingredient(request: IngredientRequest) -> Ingredient:
    return Ingredient(
        name=request.name,
        quantity=request.quantity,
        quantity_type=QuantityType(request.quantity_type),
    )


def build_new_recipe(request: CreateRecipeRequest) -> NewRecipe:
    """Build a domain recipe from a create request.

    Args:
        request: Validated create request.

    Returns:
        Recipe to be stored.
    """
    return NewRecipe(
        name=request.name,
        description=request.description,
        ingredients=[_build_ingredient(i) for i in request.ingredients],
        cooking_time=request.cooking_time,
        meal_type=MealType(request.meal_type),
    )


def build_recipe(recipe_id: int, request: CreateRecipeRequest) -> Recipe:
    """Build a domain recipe for an update of ``recipe_id``."""
    new_recipe = build_new_recipe(request)
    return Recipe(
        recipe_id=recipe_id,
        name=new_recipe.name,
        description=new_recipe.description,
        ingredients=new_recipe.ingredients,
        cooking_time=new_recipe.cooking_time,
        meal_type=new_recipe.meal_type,
    )


def build_search_criteria(
    recipe_name: str | None,
    ingredient_name: str | None,
    meal_type: MealTypeSchema | None,
) -> SearchCriteria:
    """Build search criteria from query parameters; absent ones stay None."""
    return SearchCriteria(
        recipe_name=recipe_name,
        ingredient_name=ingredient_name,
        meal_type=MealType(meal_type) if meal_type is not None else None,
    )


def build_recipe_response(recipe: Recipe) -> RecipeResponse:
    """Build the API response for a stored recipe."""
    return RecipeResponse(
        recipe_id=recipe.recipe_id,
        name=recipe.name,
        description=recipe.description,
        ingredients=[
            IngredientResponse(
                name=ingredient.name,
                quantity=ingredient.quantity,
                quantity_type=ingredient.quantity_type.value,
            )
            for ingredient in recipe.ingredients
        ],
        cooking_time=recipe.cooking_time,
        meal_type=recipe.meal_type.value,
    )
