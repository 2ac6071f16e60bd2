"""Shared pytest fixtures for the esploraCitta test suite."""

from __future__ import annotations

from typing import Any, Iterator
from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi.testclient import TestClient

from src.config.settings import Settings
from src.interfaces.llm_provider import ILLMProvider
from src.models.directory import Category, NewPlace, Place
from src.providers.store.memory_store import MemoryEntityStore
from src.services.chat_assembler import ChatContextAssembler

# ---------------------------------------------------------------------------
# Settings
# ---------------------------------------------------------------------------


@pytest.fixture
def mock_settings() -> Settings:
    """Settings with a dummy key and no .env influence on the LLM fields."""
    return Settings(
        openai_api_key="sk-test-key",
        openai_base_url="",
        app_env="test",
    )


# ---------------------------------------------------------------------------
# Mock provider fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def mock_llm_provider() -> ILLMProvider:
    """Mock ILLMProvider that answers every chat with a fixed Italian reply.

    Override with ``mock_llm_provider.chat.return_value = "..."`` or
    ``mock_llm_provider.chat.side_effect = ...`` for specific tests.
    """
    mock = MagicMock(spec=ILLMProvider)
    mock.get_provider_name.return_value = "mock-llm"
    mock.is_available.return_value = True
    mock.validate_credentials = AsyncMock(return_value=True)
    mock.chat = AsyncMock(return_value="Il ristorante è aperto fino alle 23:00.")
    return mock


# ---------------------------------------------------------------------------
# Store and domain fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def store() -> MemoryEntityStore:
    """A freshly seeded in-memory store (5 cities, 3 places, 2 reviews)."""
    return MemoryEntityStore(seed=True)


@pytest.fixture
def empty_store() -> MemoryEntityStore:
    return MemoryEntityStore(seed=False)


def make_place(place_id: int, **overrides: Any) -> Place:
    """Build a Place with sensible defaults for listing and chat tests."""
    fields: dict[str, Any] = {
        "id": place_id,
        "name": f"Luogo {place_id}",
        "description": "Un posto da visitare.",
        "address": "Via Roma 1",
        "city_id": 1,
        "category": Category.RISTORANTI,
        "rating": 40,
        "review_count": 10,
        "price_level": "$$",
        "tags": [],
    }
    fields.update(overrides)
    return Place(**fields)


@pytest.fixture
def place_factory():
    """Return ``make_place`` so tests can build places inline."""
    return make_place


@pytest.fixture
def sample_place() -> Place:
    return make_place(
        1,
        name="La Pergola",
        description="Ristorante tre stelle Michelin con vista su Roma.",
        address="Via Alberto Cadlolo, 101",
        category=Category.RISTORANTI,
        rating=48,
        review_count=458,
        price_level="$$$",
        contact_phone="+39 06 3509 2152",
        contact_email="info@lapergola.it",
        opening_hours="Mar-Sab: 19:30-23:00",
        tags=["Fine Dining", "Vista Panoramica"],
    )


@pytest.fixture
def new_place_draft() -> NewPlace:
    return NewPlace(
        name="Trattoria da Mario",
        description="Cucina toscana casalinga.",
        address="Via Rosina 2r",
        city_id=4,
        category=Category.RISTORANTI,
        tags=["Economico", "Cucina Italiana"],
    )


# ---------------------------------------------------------------------------
# Application fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def app_components(store: MemoryEntityStore, mock_llm_provider: ILLMProvider) -> dict[str, Any]:
    """The ``app.state`` entries the routes read, with a mocked LLM."""
    return {
        "version": "0.1.0",
        "store": store,
        "llm": mock_llm_provider,
        "llm_available": True,
        "chat_assembler": ChatContextAssembler(mock_llm_provider),
    }


@pytest.fixture
def client(app_components: dict[str, Any]) -> Iterator[TestClient]:
    """TestClient over the full application (middleware + handlers) with a mocked LLM."""
    from src.main import create_app

    app = create_app(app_settings=Settings(app_env="test"), components=app_components)
    with TestClient(app) as test_client:
        yield test_client
