"""Recipe service exceptions."""

from __future__ import annotations


class RecipeError(Exception):
    """Base exception for recipe service errors."""


class RecipeNotFoundError(RecipeError):
    """Raised when an update or delete targets a recipe that does not exist."""

    def __init__(self, recipe_id: int) -> None:
        self.recipe_id = recipe_id
        super().__init__(f"Recipe {recipe_id} could not be found")


class RecipeServiceError(RecipeError):
    """Raised when the recipe store fails for any other reason."""
