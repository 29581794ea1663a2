"""Gecko Recipes: recipe storage and search service."""
