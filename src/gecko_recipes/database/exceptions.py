"""Repository exceptions.

Raw asyncpg and socket errors are classified into these two kinds at the
repository boundary; nothing above the repository sees a driver exception.
"""

from __future__ import annotations


class RepositoryError(Exception):
    """Base exception for recipe repository errors."""


class RepositoryUnknownError(RepositoryError):
    """Raised when the store fails for any reason other than a missing recipe.

    The underlying driver exception is chained as ``__cause__``.
    """


class RepositoryNotFoundError(RepositoryError):
    """Raised when an update or delete targets a recipe that does not exist."""

    def __init__(self, recipe_id: int) -> None:
        self.recipe_id = recipe_id
        super().__init__(f"Recipe {recipe_id} could not be found")
