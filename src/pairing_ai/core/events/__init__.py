"""Application lifecycle events."""

from pairing_ai.core.events.lifespan import lifespan


__all__ = ["lifespan"]
