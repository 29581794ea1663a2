"""Application lifecycle events."""

from gecko_recipes.core.events.lifespan import lifespan


__all__ = ["lifespan"]
