"""Recipe request and response schemas."""

from __future__ import annotations

from datetime import timedelta

from pydantic import Field, field_validator

from gecko_recipes.schemas.base import APIRequest, APIResponse
from gecko_recipes.schemas.enums import MealType, QuantityType


# PostgreSQL text columns cannot store NUL
NO_NUL_PATTERN = r"^[^\x00]*$"


class IngredientRequest(APIRequest):
    """Ingredient line submitted with a recipe. List position sets its order."""

    name: str = Field(
        ..., min_length=1, pattern=NO_NUL_PATTERN, description="Ingredient name"
    )
    quantity: float = Field(..., description="Amount, may be fractional")
    quantity_type: QuantityType = Field(..., description="Unit of the quantity")


class CreateRecipeRequest(APIRequest):
    """Request body for creating a recipe."""

    name: str = Field(
        ..., min_length=1, pattern=NO_NUL_PATTERN, description="Recipe name"
    )
    description: str | None = Field(
        default=None,
        min_length=1,
        pattern=NO_NUL_PATTERN,
        description="Optional description",
    )
    ingredients: list[IngredientRequest] = Field(
        default_factory=list, description="Ingredients in display order"
    )
    cooking_time: timedelta | None = Field(
        default=None, description="Cooking time in seconds"
    )
    meal_type: MealType = Field(..., description="Meal the recipe is for")

    @field_validator("cooking_time")
    @classmethod
    def _non_negative_cooking_time(cls, value: timedelta | None) -> timedelta | None:
        if value is not None and value < timedelta(0):
            msg = "cooking time must not be negative"
            raise ValueError(msg)
        return value


class UpdateRecipeRequest(CreateRecipeRequest):
    """Request body for replacing a recipe.

    The recipe id comes from the path; a ``recipeId`` in the body is ignored.
    """


class IngredientResponse(APIResponse):
    """Ingredient line of a stored recipe."""

    name: str
    quantity: float
    quantity_type: QuantityType


class RecipeResponse(APIResponse):
    """A stored recipe."""

    recipe_id: int = Field(..., description="Store-assigned recipe id")
    name: str
    description: str | None = None
    ingredients: list[IngredientResponse] = Field(default_factory=list)
    cooking_time: timedelta | None = Field(
        default=None, description="Cooking time in seconds"
    )
    meal_type: MealType
