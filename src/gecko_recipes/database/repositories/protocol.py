"""Recipe repository protocol definition.

The service layer depends on this protocol only, so the PostgreSQL
implementation can be swapped for an in-memory one in tests.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable


if TYPE_CHECKING:
    from gecko_recipes.database.entities import (
        MutableRecipeEntity,
        RecipeEntity,
        SearchRecipesArguments,
    )


@runtime_checkable
class RecipeRepository(Protocol):
    """Data access for recipes and their ingredients.

    Every method raises ``RepositoryUnknownError`` when the store fails.
    ``update_recipe`` and ``delete_recipe`` raise ``RepositoryNotFoundError``
    when no recipe has the given id, leaving the store untouched.
    """

    async def list_recipes(self) -> list[RecipeEntity]:
        """Return every recipe with its ingredients attached."""
        ...

    async def create_recipe(self, entity: MutableRecipeEntity) -> RecipeEntity:
        """Persist a new recipe and its ingredients atomically.

        Ingredients get ``ingredient_order`` equal to their list index.
        """
        ...

    async def update_recipe(
        self,
        recipe_id: int,
        entity: MutableRecipeEntity,
    ) -> RecipeEntity:
        """Replace a recipe's fields and its whole ingredient list atomically."""
        ...

    async def delete_recipe(self, recipe_id: int) -> None:
        """Delete a recipe and all of its ingredients atomically."""
        ...

    async def search_recipes(
        self,
        args: SearchRecipesArguments,
    ) -> list[RecipeEntity]:
        """Return recipes matching every provided criterion.

        Name criteria are case-insensitive substring matches; the ingredient
        criterion matches if any ingredient of the recipe matches.
        """
        ...
