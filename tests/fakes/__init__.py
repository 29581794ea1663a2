"""Test doubles shared by unit tests."""

from tests.fakes.recipe_repository import InMemoryRecipeRepository


__all__ = ["InMemoryRecipeRepository"]
