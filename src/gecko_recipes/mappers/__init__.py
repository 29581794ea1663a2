"""Data mappers between HTTP schemas and domain objects."""

from gecko_recipes.mappers.recipe import (
    build_new_recipe,
    build_recipe,
    build_recipe_response,
    build_search_criteria,
)


__all__ = [
    "build_new_recipe",
    "build_recipe",
    "build_recipe_response",
    "build_search_criteria",
]
