"""FastAPI routes for the esploraCitta directory.

# ─── API ROUTE MAP ─────────────────────────────────────────────────────
#
# Endpoint                        Method  Description
# ─────────────────────────────────────────────────────────────────────
# /api/categories                 GET     Fixed category list
# /api/tags                       GET     Tag catalogue
# /api/cities                     GET     All cities
# /api/cities                     POST    Create a city
# /api/cities/featured            GET     Featured cities
# /api/cities/{id}                GET     One city
# /api/cities/{id}/places         GET     A city's places (+ filters/sort)
# /api/places                     GET     All places
# /api/places                     POST    Create a place
# /api/places/featured            GET     Featured places
# /api/places/{id}                GET     One place
# /api/places/{id}/reviews        GET     A place's reviews
# /api/places/{id}/reviews        POST    Add a review
# /api/places/{id}/chat           POST    Ask the place assistant
# /api/health                     GET     Health check
#
# Literal segments (``/featured``) are declared before ``/{id}`` so they
# are not captured as an id.
#
# Ids arrive as strings and go through ``_parse_id`` so a non-numeric id
# is a 400 with the endpoint's own message rather than a generic
# validation error.
# ──────────────────────────────────────────────────────────────────────
"""

from __future__ import annotations

from typing import Annotated, Any, TypeVar

import structlog
from fastapi import APIRouter, Body, Depends, HTTPException, Query, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ValidationError

from src.api.middleware import PayloadValidationError
from src.api.schemas import (
    ChatRequest,
    ChatResponse,
    CreateCityRequest,
    CreatePlaceRequest,
    CreateReviewRequest,
    ErrorResponse,
    HealthResponse,
    ValidationErrorResponse,
)
from src.interfaces.entity_store import IEntityStore
from src.models.directory import Category, City, NewReview, Place, Review
from src.models.listing import ListingQuery, RatingThreshold, SortMode
from src.services.chat_assembler import ChatContextAssembler
from src.services.listing_query import apply_listing_query
from src.utils.errors import PlaceNotFoundError
from src.utils.logging import get_logger

_logger: structlog.BoundLogger = get_logger(__name__)

router = APIRouter(prefix="/api")

ModelT = TypeVar("ModelT", bound=BaseModel)

_BAD_REQUEST = {400: {"model": ValidationErrorResponse}}


# ---------------------------------------------------------------------------
# Dependency injection helpers: resolve singletons from app.state
# ---------------------------------------------------------------------------


def _get_store(request: Request) -> IEntityStore:
    """Return the entity store built at startup."""
    return request.app.state.store


def _get_chat_assembler(request: Request) -> ChatContextAssembler:
    """Return the place chat assistant built at startup."""
    return request.app.state.chat_assembler


StoreDep = Annotated[IEntityStore, Depends(_get_store)]
ChatAssemblerDep = Annotated[ChatContextAssembler, Depends(_get_chat_assembler)]
JsonBody = Annotated[Any, Body()]


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _parse_id(raw: str, message: str) -> int:
    """Parse a path id, raising 400 with *message* unless it is all ASCII digits.

    ``int()`` alone would also take "+3", " 7 ", "0_1" and non-ASCII digits.
    """
    if not (raw.isascii() and raw.isdigit()):
        raise HTTPException(status_code=400, detail=message)
    return int(raw)


def _validate_body(model: type[ModelT], payload: Any, message: str) -> ModelT:
    """Validate *payload* against *model*, raising a 400 with the error list."""
    try:
        return model.model_validate(payload)
    except ValidationError as exc:
        raise PayloadValidationError(
            message,
            exc.errors(include_url=False, include_context=False),
        ) from None


def _server_error(exc: Exception, detail: str) -> JSONResponse:
    body = ErrorResponse(error=str(exc) or type(exc).__name__, detail=detail)
    return JSONResponse(status_code=500, content=body.model_dump())


async def _require_city(store: IEntityStore, raw_id: str) -> City:
    city = await store.get_city(_parse_id(raw_id, "Invalid city ID"))
    if city is None:
        raise HTTPException(status_code=404, detail="City not found")
    return city


async def _require_place(store: IEntityStore, raw_id: str) -> Place:
    place = await store.get_place(_parse_id(raw_id, "Invalid place ID"))
    if place is None:
        raise HTTPException(status_code=404, detail="Place not found")
    return place


# ---------------------------------------------------------------------------
# Catalogue
# ---------------------------------------------------------------------------


@router.get("/categories", response_model=list[str], summary="List place categories")
async def list_categories(store: StoreDep) -> list[str]:
    return await store.list_categories()


@router.get("/tags", response_model=list[str], summary="List the tag catalogue")
async def list_tags(store: StoreDep) -> list[str]:
    return await store.list_tags()


# ---------------------------------------------------------------------------
# Cities
# ---------------------------------------------------------------------------


@router.get("/cities", response_model=list[City], summary="List all cities")
async def list_cities(store: StoreDep) -> list[City]:
    return await store.list_cities()


@router.get("/cities/featured", response_model=list[City], summary="List featured cities")
async def list_featured_cities(store: StoreDep) -> list[City]:
    return await store.list_featured_cities()


@router.get("/cities/{city_id}", response_model=City, summary="Get one city")
async def get_city(city_id: str, store: StoreDep) -> City:
    return await _require_city(store, city_id)


@router.post(
    "/cities",
    response_model=City,
    status_code=201,
    responses={**_BAD_REQUEST, 500: {"model": ErrorResponse}},
    summary="Create a city",
)
async def create_city(payload: JsonBody, store: StoreDep) -> City | JSONResponse:
    body = _validate_body(CreateCityRequest, payload, "Invalid city data")
    try:
        return await store.create_city(body)
    except Exception as exc:
        _logger.error("city_create_failed", error=str(exc), exc_info=True)
        return _server_error(exc, "Failed to create city")


@router.get(
    "/cities/{city_id}/places",
    response_model=list[Place],
    responses=_BAD_REQUEST,
    summary="List a city's places, optionally filtered and sorted",
)
async def list_city_places(
    city_id: str,
    store: StoreDep,
    category: Annotated[list[Category] | None, Query()] = None,
    rating: RatingThreshold | None = None,
    tag: Annotated[list[str] | None, Query()] = None,
    sort: SortMode | None = None,
) -> list[Place]:
    """Return the city's places.

    Without listing parameters the places come back in store order.  With
    any of ``category`` / ``rating`` / ``tag`` / ``sort`` they go through
    the listing query engine, sorted by ``popular`` unless told otherwise.
    """
    city = await _require_city(store, city_id)
    places = await store.list_places_by_city(city.id)

    if category is None and rating is None and tag is None and sort is None:
        return places

    query = ListingQuery(
        categories=frozenset(category or ()),
        rating=rating or RatingThreshold.ANY,
        tags=frozenset(tag or ()),
        sort=sort or SortMode.POPULAR,
    )
    return apply_listing_query(places, query)


# ---------------------------------------------------------------------------
# Places
# ---------------------------------------------------------------------------


@router.get("/places", response_model=list[Place], summary="List all places")
async def list_places(store: StoreDep) -> list[Place]:
    return await store.list_places()


@router.get("/places/featured", response_model=list[Place], summary="List featured places")
async def list_featured_places(store: StoreDep) -> list[Place]:
    return await store.list_featured_places()


@router.get("/places/{place_id}", response_model=Place, summary="Get one place")
async def get_place(place_id: str, store: StoreDep) -> Place:
    return await _require_place(store, place_id)


@router.post(
    "/places",
    response_model=Place,
    status_code=201,
    responses={**_BAD_REQUEST, 500: {"model": ErrorResponse}},
    summary="Create a place",
)
async def create_place(payload: JsonBody, store: StoreDep) -> Place | JSONResponse:
    body = _validate_body(CreatePlaceRequest, payload, "Invalid place data")
    try:
        return await store.create_place(body)
    except Exception as exc:
        _logger.error("place_create_failed", error=str(exc), exc_info=True)
        return _server_error(exc, "Failed to create place")


# ---------------------------------------------------------------------------
# Reviews
# ---------------------------------------------------------------------------


@router.get("/places/{place_id}/reviews", response_model=list[Review], summary="List reviews")
async def list_reviews(place_id: str, store: StoreDep) -> list[Review]:
    place = await _require_place(store, place_id)
    return await store.list_reviews(place.id)


@router.post(
    "/places/{place_id}/reviews",
    response_model=Review,
    status_code=201,
    responses={**_BAD_REQUEST, 500: {"model": ErrorResponse}},
    summary="Add a review to a place",
)
async def create_review(place_id: str, payload: JsonBody, store: StoreDep) -> Review | JSONResponse:
    # Existence is checked before the body so an unknown place is always a 404.
    place = await _require_place(store, place_id)
    body = _validate_body(CreateReviewRequest, payload, "Invalid review data")
    try:
        return await store.create_review(NewReview(place_id=place.id, **body.model_dump()))
    except PlaceNotFoundError:
        raise HTTPException(status_code=404, detail="Place not found") from None
    except Exception as exc:
        _logger.error("review_create_failed", place_id=place.id, error=str(exc), exc_info=True)
        return _server_error(exc, "Failed to create review")


# ---------------------------------------------------------------------------
# Place assistant
# ---------------------------------------------------------------------------


@router.post(
    "/places/{place_id}/chat",
    response_model=ChatResponse,
    responses={**_BAD_REQUEST, 500: {"model": ErrorResponse}},
    summary="Ask the AI assistant about a place",
)
async def chat_about_place(
    place_id: str,
    payload: JsonBody,
    store: StoreDep,
    assembler: ChatAssemblerDep,
) -> ChatResponse | JSONResponse:
    """Answer one chat turn.

    Provider outages are absorbed by the assistant and still return 200
    with an apologetic reply; only unexpected failures here yield a 500.
    """
    place = await _require_place(store, place_id)
    body = _validate_body(ChatRequest, payload, "Invalid chat request")
    try:
        city = await store.get_city(place.city_id)
        reply = await assembler.converse(
            body.message,
            place,
            city.name if city else "",
            body.history,
        )
    except Exception as exc:
        _logger.error("chat_request_failed", place_id=place.id, error=str(exc), exc_info=True)
        return _server_error(exc, "Failed to process chat request")
    return ChatResponse(response=reply)


# ---------------------------------------------------------------------------
# Health
# ---------------------------------------------------------------------------


@router.get("/health", response_model=HealthResponse, summary="Application health check")
async def health_check(request: Request, store: StoreDep, assembler: ChatAssemblerDep) -> HealthResponse:
    """Report store record counts and whether the chat provider is configured."""
    llm_available = bool(getattr(request.app.state, "llm_available", False))
    return HealthResponse(
        status="healthy" if llm_available else "degraded",
        version=getattr(request.app.state, "version", "0.1.0"),
        store=await store.stats(),
        providers={
            "store": store.get_provider_name(),
            "llm": assembler.provider_name,
            "llm_available": llm_available,
        },
    )
