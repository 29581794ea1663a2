"""HTTP API schemas."""

from gecko_recipes.schemas.base import APIRequest, APIResponse
from gecko_recipes.schemas.enums import MealType, QuantityType
from gecko_recipes.schemas.recipe import (
    CreateRecipeRequest,
    IngredientRequest,
    IngredientResponse,
    RecipeResponse,
    UpdateRecipeRequest,
)


__all__ = [
    "APIRequest",
    "APIResponse",
    "CreateRecipeRequest",
    "IngredientRequest",
    "IngredientResponse",
    "MealType",
    "QuantityType",
    "RecipeResponse",
    "UpdateRecipeRequest",
]
