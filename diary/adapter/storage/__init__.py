"""Media storage adapter."""

from .local import InMemoryMediaStorage, LocalMediaStorage

__all__ = ["InMemoryMediaStorage", "LocalMediaStorage"]
