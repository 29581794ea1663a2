"""PostgreSQL database layer.

This module provides:
- Connection pool management
- Schema migrations
- Repository classes for data access
- Health check utilities
"""

from gecko_recipes.database.connection import (
    check_database_health,
    close_database_pool,
    get_database_pool,
    init_database_pool,
)
from gecko_recipes.database.exceptions import (
    RepositoryError,
    RepositoryNotFoundError,
    RepositoryUnknownError,
)
from gecko_recipes.database.repositories import (
    PostgresRecipeRepository,
    RecipeRepository,
)
from gecko_recipes.database.schema import apply_migrations


__all__ = [
    "PostgresRecipeRepository",
    "RecipeRepository",
    "RepositoryError",
    "RepositoryNotFoundError",
    "RepositoryUnknownError",
    "apply_migrations",
    "check_database_health",
    "close_database_pool",
    "get_database_pool",
    "init_database_pool",
]
