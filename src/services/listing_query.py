"""Listing query engine — filters and sorts the places of a city listing.

Everything here is pure: the input list is never mutated and the same
(places, query) pair always yields the same result.

Sort modes
----------
- ``popular`` (default): descending ``rating * review_count``
- ``rating``: descending tenths-scale rating
- ``newest``: descending id (ids are assigned in insertion order)

``sorted`` is stable, so places with equal keys keep their input order.
Store listings come back in id order, which makes ties resolve by
ascending id.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence

from src.models.directory import Place
from src.models.listing import ListingQuery, SortMode

_SORT_KEYS: dict[SortMode, Callable[[Place], int]] = {
    SortMode.POPULAR: lambda place: place.popularity,
    SortMode.RATING: lambda place: place.rating,
    SortMode.NEWEST: lambda place: place.id,
}


def matches(place: Place, query: ListingQuery) -> bool:
    """Return ``True`` if *place* passes every filter in *query*."""
    if query.categories and place.category not in query.categories:
        return False
    if place.rating < query.rating.min_rating:
        return False
    if query.tags and query.tags.isdisjoint(place.tags):
        return False
    return True


def filter_places(places: Sequence[Place], query: ListingQuery) -> list[Place]:
    return [place for place in places if matches(place, query)]


def sort_places(places: Sequence[Place], mode: SortMode) -> list[Place]:
    return sorted(places, key=_SORT_KEYS[mode], reverse=True)


def apply_listing_query(places: Sequence[Place], query: ListingQuery) -> list[Place]:
    """Filter *places* by *query* and order the survivors by ``query.sort``."""
    return sort_places(filter_places(places, query), query.sort)
