"""In-memory entity store.

Holds the four directory collections (users, cities, places, reviews) in
plain dicts keyed by sequential integer ids.  Nothing is persisted: state
lives for the lifetime of the process and is rebuilt from the seed data
on every start.

# ─── LOCKING ─────────────────────────────────────────────────────────
#
# Each EntityCollection guards "read counter, build record, store,
# increment" with its own threading.Lock, so ids stay unique and
# gap-free even if handlers run on a threadpool.  create_review also holds
# the store-wide write lock while it inserts the review and rewrites the
# owning place's aggregates, so readers never see one without the other.
# ──────────────────────────────────────────────────────────────────────
"""

from __future__ import annotations

import threading
from collections.abc import Callable, Iterable
from datetime import datetime, timezone
from typing import Generic, Protocol, TypeVar

import structlog

from src.interfaces.entity_store import IEntityStore
from src.models.directory import (
    TAG_CATALOGUE,
    Category,
    City,
    NewCity,
    NewPlace,
    NewReview,
    NewUser,
    Place,
    Review,
    User,
)
from src.providers.store.seed import SEED_CITIES, SEED_PLACES, SEED_REVIEWS
from src.utils.errors import PlaceNotFoundError
from src.utils.logging import get_logger

logger: structlog.BoundLogger = get_logger(__name__)


class _Identified(Protocol):
    id: int


T = TypeVar("T", bound=_Identified)


class EntityCollection(Generic[T]):
    """One id-keyed collection with a monotonic id counter.

    Ids start at 1 and are never reused.  Iteration order is insertion
    order.
    """

    def __init__(self, name: str) -> None:
        self._name = name
        self._records: dict[int, T] = {}
        self._next_id = 1
        self._lock = threading.Lock()

    @property
    def name(self) -> str:
        return self._name

    @property
    def next_id(self) -> int:
        """The id the next successful insert will receive."""
        return self._next_id

    def __len__(self) -> int:
        return len(self._records)

    def insert(self, build: Callable[[int], T]) -> T:
        """Build a record around the next id and store it.

        *build* receives the id and returns the finished record.  If it
        raises, the counter is left untouched.
        """
        with self._lock:
            record = build(self._next_id)
            self._records[record.id] = record
            self._next_id += 1
        return record

    def get(self, record_id: int) -> T | None:
        return self._records.get(record_id)

    def list_all(self) -> list[T]:
        return list(self._records.values())

    def list_filtered(self, predicate: Callable[[T], bool]) -> list[T]:
        return [record for record in self._records.values() if predicate(record)]

    def replace(self, record: T) -> None:
        """Swap in a new version of an already stored record."""
        with self._lock:
            if record.id not in self._records:
                raise KeyError(f"{self._name}: unknown id {record.id}")
            self._records[record.id] = record


def _fold_review_into_rating(place: Place, stars: int) -> Place:
    """Return *place* with one more review of *stars* folded into its aggregates.

    The new tenths-scale rating is the running mean rounded half-up.
    """
    count = place.review_count + 1
    total = place.rating * place.review_count + stars * 10
    rating = (2 * total + count) // (2 * count)
    return place.model_copy(update={"rating": min(rating, 50), "review_count": count})


class MemoryEntityStore(IEntityStore):
    """Process-local :class:`IEntityStore` backed by :class:`EntityCollection`.

    Parameters
    ----------
    seed:
        When ``True`` (default) the sample cities, places and reviews are
        loaded at construction.  Seed reviews do not touch the place
        aggregates, which already account for them.
    """

    def __init__(self, seed: bool = True) -> None:
        self._users: EntityCollection[User] = EntityCollection("users")
        self._cities: EntityCollection[City] = EntityCollection("cities")
        self._places: EntityCollection[Place] = EntityCollection("places")
        self._reviews: EntityCollection[Review] = EntityCollection("reviews")
        self._write_lock = threading.RLock()

        if seed:
            self._load(SEED_CITIES, SEED_PLACES, SEED_REVIEWS)

    def _load(
        self,
        cities: Iterable[NewCity],
        places: Iterable[NewPlace],
        reviews: Iterable[NewReview],
    ) -> None:
        for city in cities:
            self._insert_city(city)
        for place in places:
            self._insert_place(place)
        for review in reviews:
            self._insert_review(review)
        logger.info(
            "store_seeded",
            cities=len(self._cities),
            places=len(self._places),
            reviews=len(self._reviews),
        )

    # ------------------------------------------------------------------
    # Raw inserts (no logging, no aggregate bookkeeping)
    # ------------------------------------------------------------------

    def _insert_city(self, city: NewCity) -> City:
        return self._cities.insert(lambda new_id: City(id=new_id, **city.model_dump()))

    def _insert_place(self, place: NewPlace) -> Place:
        return self._places.insert(lambda new_id: Place(id=new_id, **place.model_dump()))

    def _insert_review(self, review: NewReview) -> Review:
        return self._reviews.insert(
            lambda new_id: Review(
                id=new_id,
                created_at=datetime.now(tz=timezone.utc),
                **review.model_dump(),
            )
        )

    # ------------------------------------------------------------------
    # IEntityStore implementation
    # ------------------------------------------------------------------

    def get_provider_name(self) -> str:
        return "memory"

    async def get_user(self, user_id: int) -> User | None:
        return self._users.get(user_id)

    async def get_user_by_username(self, username: str) -> User | None:
        matches = self._users.list_filtered(lambda user: user.username == username)
        return matches[0] if matches else None

    async def create_user(self, user: NewUser) -> User:
        created = self._users.insert(lambda new_id: User(id=new_id, **user.model_dump()))
        logger.info("user_created", user_id=created.id)
        return created

    async def list_cities(self) -> list[City]:
        return self._cities.list_all()

    async def list_featured_cities(self) -> list[City]:
        return self._cities.list_filtered(lambda city: city.is_featured)

    async def get_city(self, city_id: int) -> City | None:
        return self._cities.get(city_id)

    async def get_city_by_name(self, name: str) -> City | None:
        wanted = name.lower()
        matches = self._cities.list_filtered(lambda city: city.name.lower() == wanted)
        return matches[0] if matches else None

    async def create_city(self, city: NewCity) -> City:
        created = self._insert_city(city)
        logger.info("city_created", city_id=created.id, name=created.name)
        return created

    async def list_places(self) -> list[Place]:
        return self._places.list_all()

    async def list_places_by_city(self, city_id: int) -> list[Place]:
        return self._places.list_filtered(lambda place: place.city_id == city_id)

    async def get_place(self, place_id: int) -> Place | None:
        return self._places.get(place_id)

    async def list_featured_places(self) -> list[Place]:
        return self._places.list_filtered(lambda place: place.is_featured)

    async def create_place(self, place: NewPlace) -> Place:
        if self._cities.get(place.city_id) is None:
            # Accepted anyway: city references are not enforced on write.
            logger.warning("place_city_unknown", city_id=place.city_id, name=place.name)
        created = self._insert_place(place)
        logger.info("place_created", place_id=created.id, city_id=created.city_id)
        return created

    async def list_reviews(self, place_id: int) -> list[Review]:
        return self._reviews.list_filtered(lambda review: review.place_id == place_id)

    async def create_review(self, review: NewReview) -> Review:
        with self._write_lock:
            place = self._places.get(review.place_id)
            if place is None:
                raise PlaceNotFoundError(review.place_id, provider_name=self.get_provider_name())
            created = self._insert_review(review)
            updated = _fold_review_into_rating(place, review.rating)
            self._places.replace(updated)

        logger.info(
            "review_created",
            review_id=created.id,
            place_id=created.place_id,
            place_rating=updated.rating,
            place_review_count=updated.review_count,
        )
        return created

    async def list_categories(self) -> list[str]:
        return [category.value for category in Category]

    async def list_tags(self) -> list[str]:
        return list(TAG_CATALOGUE)

    async def stats(self) -> dict[str, int]:
        return {
            collection.name: len(collection)
            for collection in (self._users, self._cities, self._places, self._reviews)
        }

    # ------------------------------------------------------------------
    # Introspection
    # ------------------------------------------------------------------

    def next_id(self, collection: str) -> int:
        """Return the id the next insert into *collection* would receive."""
        collections = {
            c.name: c for c in (self._users, self._cities, self._places, self._reviews)
        }
        return collections[collection].next_id
