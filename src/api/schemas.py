"""Pydantic request/response schemas for the esploraCitta API.

# ─── HOW SCHEMAS WORK ──────────────────────────────────────────────────
#
# Request bodies are validated explicitly in the route handlers
# (``_validate_body`` in routes.py) so each endpoint can answer a bad
# payload with 400, its own message, and the pydantic error list.
#
# Numbers and booleans are Strict*: JSON "5" or "yes" is a type error, not
# something to coerce.
#
# City / Place / Review responses reuse the domain models from
# src/models/directory.py directly; they already serialise to the
# camelCase wire format.
#
# Convention: Request schemas end with "Request", response schemas
# end with "Response".
# ──────────────────────────────────────────────────────────────────────
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, StrictBool, StrictInt
from pydantic.alias_generators import to_camel

from src.models.chat import ChatMessage
from src.models.directory import NewCity, NewPlace


# ─── Request schemas ──────────────────────────────────────────────────

class CreateCityRequest(NewCity):
    """Body of ``POST /api/cities``."""

    is_featured: StrictBool = False


class CreatePlaceRequest(NewPlace):
    """Body of ``POST /api/places``.  ``cityId`` is not checked for existence."""

    city_id: StrictInt
    rating: StrictInt = Field(default=0, ge=0, le=50)
    review_count: StrictInt = Field(default=0, ge=0)
    is_featured: StrictBool = False


class CreateReviewRequest(BaseModel):
    """Body of ``POST /api/places/{id}/reviews``.  The place id comes from the path."""

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    user_name: str = Field(min_length=3, description="Reviewer display name.")
    rating: StrictInt = Field(ge=1, le=5, description="Stars, 1–5.")
    comment: str = Field(min_length=10)


class ChatRequest(BaseModel):
    """Body of ``POST /api/places/{id}/chat``."""

    model_config = ConfigDict(frozen=True)

    message: str = Field(min_length=1, description="The new user question.")
    history: list[ChatMessage] = Field(
        default_factory=list,
        description="Prior turns, oldest first.  Resent in full on every call.",
    )


# ─── Response schemas ─────────────────────────────────────────────────

class ChatResponse(BaseModel):
    response: str


class HealthResponse(BaseModel):
    """Application health check response."""

    status: str
    version: str
    store: dict[str, int]
    providers: dict[str, Any]


class ErrorResponse(BaseModel):
    """Body returned with a 500."""

    error: str
    detail: str | None = None


class ValidationErrorResponse(BaseModel):
    """Body returned with a 400 when a payload or query fails validation."""

    detail: str
    errors: list[dict[str, Any]]
