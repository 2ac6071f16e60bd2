"""Abstract base class for the directory entity store.

# ─── ADAPTER PATTERN ─────────────────────────────────────────────────
#
# Route handlers and services only ever see ``IEntityStore``.  The
# concrete implementation is MemoryEntityStore
# (src/providers/store/memory_store.py); a database-backed adapter can
# replace it behind the same contract without touching the routes.
#
# All operations are async so a network-backed store fits the same
# signatures.  Reads return ``None`` for a missing record: not-found is an
# expected outcome, not an error.
#
# The store is append-only: there are no update or delete operations.
# ──────────────────────────────────────────────────────────────────────
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from src.models.directory import (
    City,
    NewCity,
    NewPlace,
    NewReview,
    NewUser,
    Place,
    Review,
    User,
)


# Concrete implementation: MemoryEntityStore (src/providers/store/)
class IEntityStore(ABC):
    """Contract for the store holding users, cities, places and reviews."""

    @abstractmethod
    def get_provider_name(self) -> str:
        """Return a human-readable identifier for this store."""

    # ── Users ─────────────────────────────────────────────────────────

    @abstractmethod
    async def get_user(self, user_id: int) -> User | None:
        """Return the user with *user_id*, or ``None``."""

    @abstractmethod
    async def get_user_by_username(self, username: str) -> User | None:
        """Return the user with an exactly matching *username*, or ``None``."""

    @abstractmethod
    async def create_user(self, user: NewUser) -> User:
        """Store a new user and return it with its assigned id."""

    # ── Cities ────────────────────────────────────────────────────────

    @abstractmethod
    async def list_cities(self) -> list[City]:
        """Return every city in insertion order."""

    @abstractmethod
    async def list_featured_cities(self) -> list[City]:
        """Return the cities flagged ``is_featured``."""

    @abstractmethod
    async def get_city(self, city_id: int) -> City | None:
        """Return the city with *city_id*, or ``None``."""

    @abstractmethod
    async def get_city_by_name(self, name: str) -> City | None:
        """Return the city whose name matches *name* case-insensitively."""

    @abstractmethod
    async def create_city(self, city: NewCity) -> City:
        """Store a new city and return it with its assigned id."""

    # ── Places ────────────────────────────────────────────────────────

    @abstractmethod
    async def list_places(self) -> list[Place]:
        """Return every place in insertion order."""

    @abstractmethod
    async def list_places_by_city(self, city_id: int) -> list[Place]:
        """Return the places whose ``city_id`` equals *city_id*."""

    @abstractmethod
    async def get_place(self, place_id: int) -> Place | None:
        """Return the place with *place_id*, or ``None``."""

    @abstractmethod
    async def list_featured_places(self) -> list[Place]:
        """Return the places flagged ``is_featured``."""

    @abstractmethod
    async def create_place(self, place: NewPlace) -> Place:
        """Store a new place and return it with its assigned id.

        ``place.city_id`` is not validated against the city collection.
        """

    # ── Reviews ───────────────────────────────────────────────────────

    @abstractmethod
    async def list_reviews(self, place_id: int) -> list[Review]:
        """Return the reviews written for *place_id*, oldest first."""

    @abstractmethod
    async def create_review(self, review: NewReview) -> Review:
        """Store a review and fold it into the place's rating aggregates.

        The review insert and the aggregate update are a single atomic
        step.  ``created_at`` is set by the store.

        Raises
        ------
        src.utils.errors.PlaceNotFoundError
            If ``review.place_id`` is unknown.  No review id is consumed.
        """

    # ── Catalogue ─────────────────────────────────────────────────────

    @abstractmethod
    async def list_categories(self) -> list[str]:
        """Return the fixed category names in display order."""

    @abstractmethod
    async def list_tags(self) -> list[str]:
        """Return the tag catalogue in display order."""

    @abstractmethod
    async def stats(self) -> dict[str, int]:
        """Return record counts keyed by collection name."""
