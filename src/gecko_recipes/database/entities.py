"""Persisted shapes exchanged through the recipe repository.

These models mirror the ``recipe`` and ``ingredient`` tables. They are only
used at the storage boundary; the service layer converts them to domain
objects before anything else sees them.
"""

from __future__ import annotations

from datetime import timedelta
from enum import StrEnum

from pydantic import BaseModel, Field


class MealType(StrEnum):
    """Values of the ``meal_type`` Postgres enum."""

    BREAKFAST = "Breakfast"
    LUNCH = "Lunch"
    DINNER = "Dinner"


class QuantityType(StrEnum):
    """Values of the ``quantity_type`` Postgres enum."""

    COUNT = "Count"
    KILO = "Kilo"
    GRAM = "Gram"
    LITER = "Liter"
    MILLILITER = "Milliliter"


class IngredientEntity(BaseModel):
    """A stored ingredient row."""

    ingredient_id: int
    recipe_id: int
    ingredient_order: int
    name: str
    quantity: float
    quantity_type: QuantityType


class MutableIngredientEntity(BaseModel):
    """Ingredient input for create/update; identity and order are assigned on write."""

    name: str
    quantity: float
    quantity_type: QuantityType


class RecipeEntity(BaseModel):
    """A stored recipe row with its ingredients ordered by ``ingredient_order``."""

    recipe_id: int
    name: str
    description: str | None = None
    ingredients: list[IngredientEntity] = Field(default_factory=list)
    cooking_time: timedelta | None = None
    meal_type: MealType


class MutableRecipeEntity(BaseModel):
    """Recipe input for create/update."""

    name: str
    description: str | None = None
    ingredients: list[MutableIngredientEntity] = Field(default_factory=list)
    cooking_time: timedelta | None = None
    meal_type: MealType


class SearchRecipesArguments(BaseModel):
    """Search filter. Every field is optional and ``None`` matches everything."""

    recipe_name: str | None = None
    ingredient_name: str | None = None
    meal_type: MealType | None = None
