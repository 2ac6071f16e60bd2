"""In-memory entity store and the sample directory data it is seeded with."""

from src.providers.store.memory_store import EntityCollection, MemoryEntityStore

__all__ = ["EntityCollection", "MemoryEntityStore"]
