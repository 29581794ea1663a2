"""Recipe data repository.

Provides the PostgreSQL implementation of ``RecipeRepository`` using raw
asyncpg queries against the ``recipe`` and ``ingredient`` tables.
"""

from __future__ import annotations

from contextlib import contextmanager
from datetime import timedelta
from typing import TYPE_CHECKING

import asyncpg
import orjson

from gecko_recipes.database.connection import get_database_pool
from gecko_recipes.database.entities import (
    IngredientEntity,
    MutableIngredientEntity,
    MutableRecipeEntity,
    RecipeEntity,
    SearchRecipesArguments,
)
from gecko_recipes.database.exceptions import (
    RepositoryNotFoundError,
    RepositoryUnknownError,
)
from gecko_recipes.observability.logging import get_logger


if TYPE_CHECKING:
    from collections.abc import Iterator, Sequence

    from asyncpg import Connection, Pool, Record

logger = get_logger(__name__)


# Failures that are classified as "unknown" store errors. ValueError covers
# pydantic validation of malformed rows.
_STORE_ERRORS = (
    asyncpg.PostgresError,
    asyncpg.InterfaceError,
    OSError,
    TimeoutError,
    ValueError,
)

# Ingredients are aggregated per recipe so a listing is a single round trip.
_RECIPE_SELECT = """
    WITH ingredients_grouped AS (
        SELECT
            i.recipe_id,
            JSON_AGG(
                JSON_BUILD_OBJECT(
                    'ingredient_id', i.ingredient_id,
                    'recipe_id', i.recipe_id,
                    'ingredient_order', i.ingredient_order,
                    'name', i.name,
                    'quantity', i.quantity,
                    'quantity_type', i.quantity_type
                )
                ORDER BY i.ingredient_order
            ) AS ingredients
        FROM ingredient i
        GROUP BY i.recipe_id
    )
    SELECT
        r.recipe_id,
        r.name,
        r.description,
        r.cooking_time_secs,
        r.meal_type::TEXT AS meal_type,
        COALESCE(ig.ingredients, '[]'::JSON) AS ingredients
    FROM recipe r
    LEFT JOIN ingredients_grouped ig ON ig.recipe_id = r.recipe_id
"""

_LIST_QUERY = f"{_RECIPE_SELECT} ORDER BY r.recipe_id"

_SEARCH_QUERY = f"""{_RECIPE_SELECT}
    WHERE
        ($1::TEXT IS NULL OR r.name ILIKE '%' || $1 || '%' ESCAPE '\\') AND
        ($2::TEXT IS NULL OR EXISTS (
            SELECT 1 FROM ingredient i2
            WHERE i2.recipe_id = r.recipe_id
            AND i2.name ILIKE '%' || $2 || '%' ESCAPE '\\'
        )) AND
        ($3::meal_type IS NULL OR r.meal_type = $3::meal_type)
    ORDER BY r.recipe_id
"""

_INSERT_RECIPE = """
    INSERT INTO recipe (name, description, cooking_time_secs, meal_type)
    VALUES ($1, $2, $3, $4)
    RETURNING
        recipe_id, name, description, cooking_time_secs, meal_type::TEXT AS meal_type
"""

_UPDATE_RECIPE = """
    UPDATE recipe SET
        name = $1,
        description = $2,
        cooking_time_secs = $3,
        meal_type = $4
    WHERE recipe_id = $5
    RETURNING
        recipe_id, name, description, cooking_time_secs, meal_type::TEXT AS meal_type
"""

_DELETE_INGREDIENTS = "DELETE FROM ingredient WHERE recipe_id = $1"

_DELETE_RECIPE = "DELETE FROM recipe WHERE recipe_id = $1"

_INSERT_INGREDIENTS_PREFIX = (
    "INSERT INTO ingredient "
    "(recipe_id, ingredient_order, name, quantity, quantity_type) VALUES "
)

_INSERT_INGREDIENTS_RETURNING = (
    " RETURNING ingredient_id, recipe_id, ingredient_order, name,"
    " quantity::TEXT::FLOAT8 AS quantity, quantity_type::TEXT AS quantity_type"
)

# Columns bound per ingredient row in the bulk insert
_INGREDIENT_COLUMNS = 5

# recipe_id is an INTEGER column
_MIN_RECIPE_ID = -(2**31)
_MAX_RECIPE_ID = 2**31 - 1


@contextmanager
def _store_errors(action: str) -> Iterator[None]:
    """Re-raise driver failures as ``RepositoryUnknownError``.

    ``RepositoryNotFoundError`` raised inside the block passes through.
    """
    try:
        yield
    except _STORE_ERRORS as e:
        logger.exception("Recipe store operation failed", action=action)
        msg = f"Failed to {action}"
        raise RepositoryUnknownError(msg) from e


def escape_like(term: str) -> str:
    r"""Escape LIKE wildcards so the term matches literally (escape char ``\``)."""
    return term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def _to_seconds(cooking_time: timedelta | None) -> int | None:
    if cooking_time is None:
        return None
    return int(cooking_time.total_seconds())


def _from_seconds(seconds: int | None) -> timedelta | None:
    if seconds is None:
        return None
    return timedelta(seconds=seconds)


def build_ingredient_insert(
    recipe_id: int,
    ingredients: Sequence[MutableIngredientEntity],
) -> tuple[str, list[object]]:
    """Build one multi-row INSERT for a recipe's ingredients.

    Each row binds ``(recipe_id, ingredient_order, name, quantity,
    quantity_type)`` with ``ingredient_order`` equal to the list index.

    Args:
        recipe_id: Owning recipe.
        ingredients: Non-empty ingredient list.

    Returns:
        The SQL text and its flat argument list.
    """
    rows: list[str] = []
    args: list[object] = []
    for order, ingredient in enumerate(ingredients):
        base = order * _INGREDIENT_COLUMNS
        placeholders = ", ".join(
            f"${base + offset}" for offset in range(1, _INGREDIENT_COLUMNS + 1)
        )
        rows.append(f"({placeholders})")
        args.extend(
            [
                recipe_id,
                order,
                ingredient.name,
                ingredient.quantity,
                ingredient.quantity_type.value,
            ]
        )

    query = _INSERT_INGREDIENTS_PREFIX + ", ".join(rows) + _INSERT_INGREDIENTS_RETURNING
    return query, args


class PostgresRecipeRepository:
    """PostgreSQL-backed ``RecipeRepository``.

    Every write runs inside ``Connection.transaction()``: the transaction
    commits when the block exits normally and rolls back on any exception,
    including cancellation of the calling request.
    """

    def __init__(self, pool: Pool | None = None) -> None:
        """Initialize repository with optional connection pool.

        Args:
            pool: asyncpg connection pool. If None, uses global pool.
        """
        self._pool = pool

    @property
    def pool(self) -> Pool:
        """Get the database connection pool."""
        if self._pool is not None:
            return self._pool
        return get_database_pool()

    async def list_recipes(self) -> list[RecipeEntity]:
        """Return every recipe with its ingredients attached."""
        with _store_errors("get recipes"):
            async with self.pool.acquire() as conn:
                rows = await conn.fetch(_LIST_QUERY)
            return [self._row_to_recipe(row) for row in rows]

    async def search_recipes(
        self,
        args: SearchRecipesArguments,
    ) -> list[RecipeEntity]:
        """Return recipes matching every provided criterion."""
        recipe_name = (
            escape_like(args.recipe_name) if args.recipe_name is not None else None
        )
        ingredient_name = (
            escape_like(args.ingredient_name)
            if args.ingredient_name is not None
            else None
        )
        meal_type = args.meal_type.value if args.meal_type is not None else None

        with _store_errors("query for recipes"):
            async with self.pool.acquire() as conn:
                rows = await conn.fetch(
                    _SEARCH_QUERY, recipe_name, ingredient_name, meal_type
                )
            return [self._row_to_recipe(row) for row in rows]

    async def create_recipe(self, entity: MutableRecipeEntity) -> RecipeEntity:
        """Insert a recipe and its ingredients in one transaction."""
        with _store_errors("create recipe"):
            async with self.pool.acquire() as conn, conn.transaction():
                row = await conn.fetchrow(
                    _INSERT_RECIPE,
                    entity.name,
                    entity.description,
                    _to_seconds(entity.cooking_time),
                    entity.meal_type.value,
                )
                ingredients = await self._insert_ingredients(
                    conn, row["recipe_id"], entity.ingredients
                )

            recipe = self._compose(row, ingredients)

        logger.debug(
            "Created recipe",
            recipe_id=recipe.recipe_id,
            ingredient_count=len(ingredients),
        )
        return recipe

    async def update_recipe(
        self,
        recipe_id: int,
        entity: MutableRecipeEntity,
    ) -> RecipeEntity:
        """Replace a recipe's fields and ingredients in one transaction.

        Existing ingredient rows are deleted and the new list is inserted,
        so ingredient ids are not preserved across updates.

        Raises:
            RepositoryNotFoundError: No recipe has ``recipe_id``.
        """
        _ensure_storable_id(recipe_id)
        with _store_errors("update recipe"):
            async with self.pool.acquire() as conn, conn.transaction():
                row = await conn.fetchrow(
                    _UPDATE_RECIPE,
                    entity.name,
                    entity.description,
                    _to_seconds(entity.cooking_time),
                    entity.meal_type.value,
                    recipe_id,
                )
                if row is None:
                    raise RepositoryNotFoundError(recipe_id)

                await conn.execute(_DELETE_INGREDIENTS, recipe_id)
                ingredients = await self._insert_ingredients(
                    conn, recipe_id, entity.ingredients
                )

            recipe = self._compose(row, ingredients)

        logger.debug(
            "Updated recipe",
            recipe_id=recipe_id,
            ingredient_count=len(ingredients),
        )
        return recipe

    async def delete_recipe(self, recipe_id: int) -> None:
        """Delete a recipe's ingredients, then the recipe, in one transaction.

        Raises:
            RepositoryNotFoundError: No recipe has ``recipe_id``.
        """
        _ensure_storable_id(recipe_id)
        with _store_errors("delete recipe"):
            async with self.pool.acquire() as conn, conn.transaction():
                await conn.execute(_DELETE_INGREDIENTS, recipe_id)
                status = await conn.execute(_DELETE_RECIPE, recipe_id)
                if _rows_affected(status) == 0:
                    raise RepositoryNotFoundError(recipe_id)

        logger.debug("Deleted recipe", recipe_id=recipe_id)

    async def _insert_ingredients(
        self,
        conn: Connection,
        recipe_id: int,
        ingredients: Sequence[MutableIngredientEntity],
    ) -> list[IngredientEntity]:
        """Bulk insert ingredients, skipping the statement for an empty list.

        An INSERT with zero value rows is not valid SQL, so nothing is sent.
        """
        if not ingredients:
            return []

        query, args = build_ingredient_insert(recipe_id, ingredients)
        rows = await conn.fetch(query, *args)
        created = [IngredientEntity.model_validate(dict(row)) for row in rows]
        return sorted(created, key=lambda ingredient: ingredient.ingredient_order)

    def _compose(
        self,
        row: Record,
        ingredients: list[IngredientEntity],
    ) -> RecipeEntity:
        return RecipeEntity(
            recipe_id=row["recipe_id"],
            name=row["name"],
            description=row["description"],
            ingredients=ingredients,
            cooking_time=_from_seconds(row["cooking_time_secs"]),
            meal_type=row["meal_type"],
        )

    def _row_to_recipe(self, row: Record) -> RecipeEntity:
        """Map an aggregated recipe row to an entity.

        asyncpg returns ``json`` columns as text unless a codec is registered.
        """
        raw = row["ingredients"]
        payload = orjson.loads(raw) if isinstance(raw, (str, bytes)) else raw
        ingredients = [IngredientEntity.model_validate(item) for item in payload or []]
        return self._compose(row, ingredients)


def _rows_affected(status: str) -> int:
    """Parse the row count from a command tag such as ``DELETE 3``.

    Raises:
        ValueError: The tag does not end in a row count.
    """
    return int(status.rsplit(" ", 1)[-1])


def _ensure_storable_id(recipe_id: int) -> None:
    """Raise ``RepositoryNotFoundError`` for ids the column cannot hold."""
    if not _MIN_RECIPE_ID <= recipe_id <= _MAX_RECIPE_ID:
        raise RepositoryNotFoundError(recipe_id)
