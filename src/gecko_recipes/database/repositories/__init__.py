"""Database repositories."""

from gecko_recipes.database.repositories.protocol import RecipeRepository
from gecko_recipes.database.repositories.recipe import PostgresRecipeRepository


__all__ = ["PostgresRecipeRepository", "RecipeRepository"]
