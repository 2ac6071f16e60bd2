"""esploraCitta domain models — re-exports all public model classes.

Other parts of the codebase can import from ``src.models`` directly
instead of from the individual submodules:
    - directory.py  — Users, cities, places, reviews and the category/tag vocabulary
    - listing.py    — Listing query: category/rating/tag filters and sort modes
    - chat.py       — Chat history turns sent with each assistant request

``New*`` models are insert drafts without an id; the store assigns ids.
"""

from __future__ import annotations

from src.models.chat import ChatMessage, ChatRole
from src.models.directory import (
    TAG_CATALOGUE,
    Category,
    City,
    NewCity,
    NewPlace,
    NewReview,
    NewUser,
    Place,
    PriceLevel,
    Review,
    User,
)
from src.models.listing import ListingQuery, RatingThreshold, SortMode

__all__ = [
    "TAG_CATALOGUE",
    "Category",
    "ChatMessage",
    "ChatRole",
    "City",
    "ListingQuery",
    "NewCity",
    "NewPlace",
    "NewReview",
    "NewUser",
    "Place",
    "PriceLevel",
    "RatingThreshold",
    "Review",
    "SortMode",
    "User",
]
