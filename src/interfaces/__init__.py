"""Public interface definitions for the esploraCitta storage and LLM layers.

Route handlers and services depend only on the abstract base classes
defined here.  Concrete adapters implement them and are injected at
startup in ``src/main.py``, so tests can swap in a mock provider or a
fresh store without touching the callers.

CONCRETE PROVIDER MAP:
    Interface        →  Concrete implementation (in src/providers/)
    ──────────────────────────────────────────────────────────
    IEntityStore     →  MemoryEntityStore
    ILLMProvider     →  OpenAILLMProvider (OpenAI or any compatible endpoint)

Re-exports
----------
IEntityStore
    Users, cities, places and reviews with store-assigned ids.
ILLMProvider
    Chat-completion contract.
"""

from src.interfaces.entity_store import IEntityStore
from src.interfaces.llm_provider import ILLMProvider

__all__ = [
    "IEntityStore",
    "ILLMProvider",
]
