"""Recipe service package.

Provides recipe CRUD and search on top of the recipe repository.
"""

from gecko_recipes.services.recipe.exceptions import (
    RecipeError,
    RecipeNotFoundError,
    RecipeServiceError,
)
from gecko_recipes.services.recipe.models import (
    Ingredient,
    MealType,
    NewRecipe,
    QuantityType,
    Recipe,
    SearchCriteria,
)
from gecko_recipes.services.recipe.service import RecipeService


__all__ = [
    "Ingredient",
    "MealType",
    "NewRecipe",
    "QuantityType",
    "Recipe",
    "RecipeError",
    "RecipeNotFoundError",
    "RecipeService",
    "RecipeServiceError",
    "SearchCriteria",
]
