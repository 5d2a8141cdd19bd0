"""Application lifecycle events."""

from quotes_api.core.events.lifespan import lifespan


__all__ = ["lifespan"]
