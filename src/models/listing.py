"""Listing query models: the filter and sort criteria for a place listing."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from src.models.directory import Category


class RatingThreshold(str, Enum):
    """Mutually exclusive minimum-rating filters.

    Values are the wire tokens; :attr:`min_rating` is the tenths-scale
    bound compared against ``Place.rating``.
    """

    ANY = "any"
    THREE_PLUS = "3plus"
    FOUR_PLUS = "4plus"
    FOUR_HALF_PLUS = "4.5plus"

    @property
    def min_rating(self) -> int:
        return _MIN_RATING[self]


_MIN_RATING: dict[RatingThreshold, int] = {
    RatingThreshold.ANY: 0,
    RatingThreshold.THREE_PLUS: 30,
    RatingThreshold.FOUR_PLUS: 40,
    RatingThreshold.FOUR_HALF_PLUS: 45,
}


class SortMode(str, Enum):
    POPULAR = "popular"
    RATING = "rating"
    NEWEST = "newest"


class ListingQuery(BaseModel):
    """Filter and sort criteria for a list of places.

    Empty ``categories`` / ``tags`` mean "no filter" for that dimension.
    Within ``tags`` a place matches if it carries ANY of them; the three
    filter dimensions are combined with AND.
    """

    model_config = ConfigDict(frozen=True)

    categories: frozenset[Category] = Field(default_factory=frozenset)
    rating: RatingThreshold = RatingThreshold.ANY
    tags: frozenset[str] = Field(default_factory=frozenset)
    sort: SortMode = SortMode.POPULAR
