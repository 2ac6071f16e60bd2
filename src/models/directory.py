"""Directory domain models — cities, places, reviews and users.

# ─── ARCHITECTURE ROLE ───────────────────────────────────────────────
#
# Layer: Models (bottom of the dependency graph, no imports from upper layers).
#
# Every record type comes in two flavours:
#   - ``NewX``  the payload accepted by the entity store (no ``id``)
#   - ``X``     the stored record, which adds the store-assigned ``id``
#               (and ``created_at`` for reviews)
#
# All models are frozen.  The only post-insert change the store makes is
# bumping a place's rating/review_count aggregates, done through
# ``model_copy(update={...})``.
#
# Wire format: attributes are snake_case in Python and camelCase in JSON
# (``city_id`` <-> ``cityId``).  ``populate_by_name`` lets callers build
# models with either spelling.
# ──────────────────────────────────────────────────────────────────────
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class Category(str, Enum):
    """Fixed set of place categories, in display order."""

    RISTORANTI = "Ristoranti"
    BAR = "Bar"
    MUSEI = "Musei"
    PALESTRE = "Palestre"
    PISCINE = "Piscine"
    HOTEL = "Hotel"
    ALTRI = "Altri"


# Catalogue served by /api/tags.  Places may carry tags outside this list.
TAG_CATALOGUE: tuple[str, ...] = (
    "Economico",
    "Romantico",
    "Terrazza",
    "Centro storico",
    "Pet-friendly",
    "Wi-Fi gratis",
    "Vista panoramica",
    "Fine Dining",
    "Cucina Italiana",
    "Arte",
    "Rinascimento",
    "Lusso",
)

PriceLevel = Literal["$", "$$", "$$$", "$$$$"]


class _DirectoryModel(BaseModel):
    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )


# ─── Users ───────────────────────────────────────────────────────────

class NewUser(_DirectoryModel):
    username: str = Field(min_length=1)
    password: str = Field(min_length=1, repr=False)


class User(NewUser):
    id: int = Field(ge=1)


# ─── Cities ──────────────────────────────────────────────────────────

class NewCity(_DirectoryModel):
    """A city as submitted for insertion."""

    name: str = Field(min_length=1, description="City name, e.g. 'Roma'.")
    country: str = Field(min_length=1)
    description: str = Field(min_length=1)
    image_url: str = Field(min_length=1, description="Hero image URL.")
    is_featured: bool = Field(default=False, description="Shown on landing surfaces.")


class City(NewCity):
    id: int = Field(ge=1, description="Store-assigned sequential id.")


# ─── Places ──────────────────────────────────────────────────────────

class NewPlace(_DirectoryModel):
    """A place (restaurant, museum, hotel, ...) as submitted for insertion.

    ``rating`` is on the tenths scale: 48 means 4.8/5.  ``city_id`` is not
    checked against the city collection when the place is stored.
    """

    name: str = Field(min_length=1)
    description: str = Field(min_length=1)
    address: str = Field(min_length=1)
    city_id: int = Field(description="Id of the owning city.")
    category: Category
    rating: int = Field(default=0, ge=0, le=50, description="Tenths-scale rating, 0–50.")
    review_count: int = Field(default=0, ge=0)
    price_level: PriceLevel = "$$"
    contact_phone: str | None = None
    contact_email: str | None = None
    opening_hours: str | None = None
    tags: list[str] = Field(default_factory=list)
    images: list[str] = Field(default_factory=list)
    is_featured: bool = False
    latitude: str | None = None
    longitude: str | None = None


class Place(NewPlace):
    id: int = Field(ge=1, description="Store-assigned sequential id.")

    @property
    def display_rating(self) -> str:
        """Rating on the 0.0–5.0 scale with one decimal, e.g. ``"4.8"``."""
        return f"{self.rating / 10:.1f}"

    @property
    def popularity(self) -> int:
        return self.rating * self.review_count


# ─── Reviews ─────────────────────────────────────────────────────────

class NewReview(_DirectoryModel):
    place_id: int
    user_name: str = Field(min_length=1)
    rating: int = Field(ge=1, le=5, description="Stars, 1–5.")
    comment: str = Field(min_length=1)


class Review(NewReview):
    id: int = Field(ge=1)
    # Stamped by the store at insert time, never taken from the client.
    created_at: datetime
