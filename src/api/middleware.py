"""API middleware and exception handlers — CORS, request logging, errors.

# ─── MIDDLEWARE EXECUTION ORDER ────────────────────────────────────────
#
# Starlette middleware is a stack (last added, first executed):
#
#   In main.py:
#     app.add_middleware(ErrorHandlingMiddleware)   # added 1st → inner
#     app.add_middleware(RequestLoggingMiddleware)   # added 2nd → outer
#
#   Client → RequestLogging → ErrorHandling → exception handlers → route
#
# The exception handlers registered by ``register_exception_handlers``
# sit closest to the routes: they turn validation failures into 400s
# before either middleware sees an exception.
# ──────────────────────────────────────────────────────────────────────
"""

from __future__ import annotations

import time
from typing import Any

import structlog
from fastapi import FastAPI, Request, Response
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint

from src.api.schemas import ErrorResponse, ValidationErrorResponse
from src.utils.errors import EsploraError
from src.utils.logging import get_logger

_logger: structlog.BoundLogger = get_logger(__name__)


class PayloadValidationError(Exception):
    """A request body failed schema validation.

    Raised by the route handlers and answered with 400, *message* and the
    structured error list.
    """

    def __init__(self, message: str, errors: list[dict[str, Any]]) -> None:
        self.message = message
        self.errors = errors
        super().__init__(message)


# ---------------------------------------------------------------------------
# CORS
# ---------------------------------------------------------------------------


def configure_cors(app: FastAPI, *, allowed_origins: list[str] | None = None) -> None:
    """Add CORS middleware; ``["*"]`` when no origins are given."""
    origins = allowed_origins or ["*"]
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )


# ---------------------------------------------------------------------------
# Request Logging
# ---------------------------------------------------------------------------


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Log every HTTP request with method, path, status code, and duration."""

    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        start = time.perf_counter()
        response: Response | None = None

        try:
            response = await call_next(request)
            return response
        finally:
            duration_ms = round((time.perf_counter() - start) * 1000, 2)
            status_code = response.status_code if response else 500
            _logger.info(
                "http_request",
                method=request.method,
                path=str(request.url.path),
                status=status_code,
                duration_ms=duration_ms,
            )


# ---------------------------------------------------------------------------
# Error Handling
# ---------------------------------------------------------------------------


class ErrorHandlingMiddleware(BaseHTTPMiddleware):
    """Turn an escaped ``EsploraError`` into a 500 :class:`ErrorResponse`.

    Details go to the server log only; the client sees the error type
    and message.
    """

    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        try:
            return await call_next(request)
        except EsploraError as exc:
            _logger.error(
                "application_error",
                error_type=type(exc).__name__,
                message=exc.message,
                provider=exc.provider_name,
                path=str(request.url.path),
            )
            body = ErrorResponse(error=type(exc).__name__, detail=exc.message)
            return JSONResponse(status_code=500, content=body.model_dump())


def _validation_response(message: str, errors: list[dict[str, Any]]) -> JSONResponse:
    body = ValidationErrorResponse(detail=message, errors=errors)
    return JSONResponse(status_code=400, content=jsonable_encoder(body))


async def _payload_error_handler(request: Request, exc: PayloadValidationError) -> JSONResponse:
    return _validation_response(exc.message, exc.errors)


async def _request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    # Malformed JSON and bad query parameters: 400 instead of FastAPI's 422.
    return _validation_response("Invalid request", jsonable_encoder(exc.errors()))


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(PayloadValidationError, _payload_error_handler)
    app.add_exception_handler(RequestValidationError, _request_validation_handler)
