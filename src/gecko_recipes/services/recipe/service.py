"""Recipe service.

Sits between the HTTP layer and the recipe repository: converts domain
objects to repository entities and back, and translates repository errors
into recipe service errors of the same kind.
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import TYPE_CHECKING

from gecko_recipes.database import entities
from gecko_recipes.database.exceptions import (
    RepositoryError,
    RepositoryNotFoundError,
)
from gecko_recipes.observability.logging import get_logger
from gecko_recipes.services.recipe.exceptions import (
    RecipeNotFoundError,
    RecipeServiceError,
)
from gecko_recipes.services.recipe.models import (
    Ingredient,
    MealType,
    NewRecipe,
    QuantityType,
    Recipe,
    SearchCriteria,
)


if TYPE_CHECKING:
    from collections.abc import Iterator

    from gecko_recipes.database.repositories.protocol import RecipeRepository

logger = get_logger(__name__)


# =============================================================================
# Entity <-> domain conversions
# =============================================================================


def ingredient_from_entity(entity: entities.IngredientEntity) -> Ingredient:
    """Drop storage identity from an ingredient row."""
    return Ingredient(
        name=entity.name,
        quantity=entity.quantity,
        quantity_type=QuantityType(entity.quantity_type.value),
    )


def ingredient_to_entity(ingredient: Ingredient) -> entities.MutableIngredientEntity:
    """Convert a domain ingredient to repository input."""
    return entities.MutableIngredientEntity(
        name=ingredient.name,
        quantity=ingredient.quantity,
        quantity_type=entities.QuantityType(ingredient.quantity_type.value),
    )


def recipe_from_entity(entity: entities.RecipeEntity) -> Recipe:
    """Convert a stored recipe to a domain recipe, keeping ingredient order."""
    return Recipe(
        recipe_id=entity.recipe_id,
        name=entity.name,
        description=entity.description,
        ingredients=[ingredient_from_entity(i) for i in entity.ingredients],
        cooking_time=entity.cooking_time,
        meal_type=MealType(entity.meal_type.value),
    )


def recipe_to_entity(recipe: NewRecipe) -> entities.MutableRecipeEntity:
    """Convert a new or existing domain recipe to repository input."""
    return entities.MutableRecipeEntity(
        name=recipe.name,
        description=recipe.description,
        ingredients=[ingredient_to_entity(i) for i in recipe.ingredients],
        cooking_time=recipe.cooking_time,
        meal_type=entities.MealType(recipe.meal_type.value),
    )


def criteria_to_arguments(criteria: SearchCriteria) -> entities.SearchRecipesArguments:
    """Convert domain search criteria to repository search arguments."""
    return entities.SearchRecipesArguments(
        recipe_name=criteria.recipe_name,
        ingredient_name=criteria.ingredient_name,
        meal_type=(
            entities.MealType(criteria.meal_type.value)
            if criteria.meal_type is not None
            else None
        ),
    )


@contextmanager
def _translate_errors() -> Iterator[None]:
    """Map repository errors onto recipe service errors of the same kind."""
    try:
        yield
    except RepositoryNotFoundError as e:
        raise RecipeNotFoundError(e.recipe_id) from e
    except RepositoryError as e:
        raise RecipeServiceError(str(e)) from e


# =============================================================================
# Service
# =============================================================================


class RecipeService:
    """Service for managing recipes.

    Holds no state beyond the repository handle, so one instance is shared
    by every request.
    """

    def __init__(self, repository: RecipeRepository) -> None:
        """Initialize the recipe service.

        Args:
            repository: Recipe repository implementation.
        """
        self._repository = repository

    async def list_recipes(self) -> list[Recipe]:
        """Return every stored recipe."""
        with _translate_errors():
            found = await self._repository.list_recipes()
        return [recipe_from_entity(entity) for entity in found]

    async def create_recipe(self, recipe: NewRecipe) -> Recipe:
        """Store a new recipe.

        Args:
            recipe: Recipe to create.

        Returns:
            The stored recipe with its assigned id.

        Raises:
            RecipeServiceError: The store failed.
        """
        with _translate_errors():
            created = await self._repository.create_recipe(recipe_to_entity(recipe))

        logger.info(
            "Recipe created",
            recipe_id=created.recipe_id,
            ingredient_count=len(created.ingredients),
        )
        return recipe_from_entity(created)

    async def update_recipe(self, recipe: Recipe) -> Recipe:
        """Replace a stored recipe, including its whole ingredient list.

        Args:
            recipe: New contents; ``recipe.recipe_id`` selects the target.

        Returns:
            The recipe as stored after the update.

        Raises:
            RecipeNotFoundError: No recipe has ``recipe.recipe_id``.
            RecipeServiceError: The store failed.
        """
        with _translate_errors():
            updated = await self._repository.update_recipe(
                recipe.recipe_id, recipe_to_entity(recipe)
            )

        logger.info("Recipe updated", recipe_id=updated.recipe_id)
        return recipe_from_entity(updated)

    async def delete_recipe(self, recipe_id: int) -> None:
        """Delete a recipe and its ingredients.

        Raises:
            RecipeNotFoundError: No recipe has ``recipe_id``.
            RecipeServiceError: The store failed.
        """
        with _translate_errors():
            await self._repository.delete_recipe(recipe_id)

        logger.info("Recipe deleted", recipe_id=recipe_id)

    async def search_recipes(self, criteria: SearchCriteria) -> list[Recipe]:
        """Return recipes matching all provided criteria."""
        with _translate_errors():
            found = await self._repository.search_recipes(
                criteria_to_arguments(criteria)
            )
        return [recipe_from_entity(entity) for entity in found]
