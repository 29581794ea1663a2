"""Ordered SQL migrations, applied by gecko_recipes.database.schema."""
