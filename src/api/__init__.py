"""esploraCitta API layer — routes, schemas, and middleware."""

from src.api.middleware import (
    ErrorHandlingMiddleware,
    PayloadValidationError,
    RequestLoggingMiddleware,
    configure_cors,
    register_exception_handlers,
)
from src.api.routes import router
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

__all__ = [
    "ErrorHandlingMiddleware",
    "PayloadValidationError",
    "RequestLoggingMiddleware",
    "configure_cors",
    "register_exception_handlers",
    "router",
    "ChatRequest",
    "ChatResponse",
    "CreateCityRequest",
    "CreatePlaceRequest",
    "CreateReviewRequest",
    "ErrorResponse",
    "HealthResponse",
    "ValidationErrorResponse",
]
