"""Application services."""

from .filesystem import EntityFactory, Filesystem

__all__ = [
    "EntityFactory",
    "Filesystem",
]
