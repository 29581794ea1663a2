"""Enumeration types exposed on the HTTP API."""

from __future__ import annotations

from enum import StrEnum


class MealType(StrEnum):
    """Meal a recipe is intended for."""

    BREAKFAST = "Breakfast"
    LUNCH = "Lunch"
    DINNER = "Dinner"


class QuantityType(StrEnum):
    """Unit of an ingredient quantity."""

    COUNT = "Count"
    KILO = "Kilo"
    GRAM = "Gram"
    LITER = "Liter"
    MILLILITER = "Milliliter"
