"""Shared test fixtures."""

from __future__ import annotations

from datetime import timedelta

import pytest

from gecko_recipes.core.config import Settings
from gecko_recipes.core.config.settings import (
    AppSettings,
    DatabaseSettings,
    LoggingSettings,
    MetricsSettings,
    ObservabilitySettings,
)
from gecko_recipes.database.entities import (
    MealType,
    MutableIngredientEntity,
    MutableRecipeEntity,
    QuantityType,
)


@pytest.fixture
def test_settings() -> Settings:
    """Settings for tests: no metrics registry, no migrations on startup."""
    return Settings(
        APP_ENV="test",
        app=AppSettings(name="gecko-test", version="0.0.1-test", debug=True),
        database=DatabaseSettings(run_migrations=False),
        logging=LoggingSettings(level="DEBUG", format="json"),
        observability=ObservabilitySettings(metrics=MetricsSettings(enabled=False)),
    )


@pytest.fixture
def cake_entity() -> MutableRecipeEntity:
    """Chocolate cake with two ingredients."""
    return MutableRecipeEntity(
        name="Chocolate Cake",
        description="Rich and moist",
        ingredients=[
            MutableIngredientEntity(
                name="Flour", quantity=2.0, quantity_type=QuantityType.KILO
            ),
            MutableIngredientEntity(
                name="Cocoa", quantity=500.0, quantity_type=QuantityType.GRAM
            ),
        ],
        cooking_time=timedelta(minutes=45),
        meal_type=MealType.DINNER,
    )
