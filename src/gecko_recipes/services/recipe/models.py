"""Domain objects for recipes.

These are what the presentation layer works with. They carry no storage
identity for ingredients; ingredient order is the list order.
"""

from __future__ import annotations

from datetime import timedelta
from enum import StrEnum

from pydantic import BaseModel, Field


class MealType(StrEnum):
    """Meal a recipe is intended for."""

    BREAKFAST = "Breakfast"
    LUNCH = "Lunch"
    DINNER = "Dinner"


class QuantityType(StrEnum):
    """Unit an ingredient quantity is expressed in."""

    COUNT = "Count"
    KILO = "Kilo"
    GRAM = "Gram"
    LITER = "Liter"
    MILLILITER = "Milliliter"


class Ingredient(BaseModel):
    """An ingredient line of a recipe."""

    name: str
    quantity: float
    quantity_type: QuantityType


class NewRecipe(BaseModel):
    """A recipe that has not been stored yet."""

    name: str
    description: str | None = None
    ingredients: list[Ingredient] = Field(default_factory=list)
    cooking_time: timedelta | None = None
    meal_type: MealType


class Recipe(NewRecipe):
    """A stored recipe."""

    recipe_id: int


class SearchCriteria(BaseModel):
    """Recipe search filter; ``None`` fields do not filter."""

    recipe_name: str | None = None
    ingredient_name: str | None = None
    meal_type: MealType | None = None
