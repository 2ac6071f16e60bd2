"""esploraCitta FastAPI application entry point.

Wires the entity store, the LLM provider and the place chat assistant into
the routes via ``app.state``.  Loads configuration from ``.env`` and
``config/config.yaml`` and configures structured logging.
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from pathlib import Path
from typing import Any

import structlog
import uvicorn
from fastapi import FastAPI

from src.api.middleware import (
    ErrorHandlingMiddleware,
    RequestLoggingMiddleware,
    configure_cors,
    register_exception_handlers,
)
from src.api.routes import router as api_router
from src.config.loader import load_config
from src.config.settings import Settings
from src.interfaces.llm_provider import ILLMProvider
from src.providers.llm.openai_provider import OpenAILLMProvider
from src.providers.store.memory_store import MemoryEntityStore
from src.services.chat_assembler import ChatContextAssembler
from src.utils.logging import configure_logging, get_logger

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

CONFIG_PATH = Path(__file__).resolve().parent.parent / "config" / "config.yaml"

# ---------------------------------------------------------------------------
# Module-level settings & logging
# ---------------------------------------------------------------------------

settings = Settings()

configure_logging(
    log_level=settings.log_level,
    json_output=(settings.app_env == "production"),
)
_logger: structlog.BoundLogger = get_logger(__name__)


# ---------------------------------------------------------------------------
# Component assembly
# ---------------------------------------------------------------------------


def _build_llm_provider(app_settings: Settings) -> ILLMProvider:
    """Return the chat-completion provider.

    Only the OpenAI-compatible client is supported; without an API key the
    provider is still built but reports itself unavailable, and every
    chat turn falls back to the apologetic reply.
    """
    return OpenAILLMProvider(settings=app_settings)


def _build_all(app_settings: Settings) -> dict[str, Any]:
    """Construct the store and services for the application.

    Returns a flat dict of named components to be stored on ``app.state``.
    """
    config = load_config(str(CONFIG_PATH), settings=app_settings)

    store = MemoryEntityStore(seed=config["store"]["seed_data"])

    llm = _build_llm_provider(app_settings)
    chat_assembler = ChatContextAssembler(
        llm,
        temperature=config["chat"]["temperature"],
        max_tokens=config["chat"]["max_tokens"],
    )

    return {
        "config": config,
        "version": config.get("app", {}).get("version", "0.1.0"),
        "store": store,
        "llm": llm,
        "llm_available": llm.is_available(),
        "chat_assembler": chat_assembler,
    }


# ---------------------------------------------------------------------------
# FastAPI application factory
# ---------------------------------------------------------------------------


def create_app(
    app_settings: Settings | None = None,
    components: dict[str, Any] | None = None,
) -> FastAPI:
    """Build and configure the FastAPI application.

    Args:
        app_settings: Settings to build components from; the module-level
            ``settings`` when omitted.
        components: Prebuilt ``app.state`` entries.  When given they are
            installed as-is at startup instead of calling ``_build_all``.
    """
    app_settings = app_settings or settings

    @asynccontextmanager
    async def _lifespan(application: FastAPI):  # noqa: ANN202
        built = components if components is not None else _build_all(app_settings)
        for key, value in built.items():
            setattr(application.state, key, value)

        _logger.info(
            "app_startup",
            version=built.get("version", "0.1.0"),
            environment=app_settings.app_env,
            store=built["store"].get_provider_name(),
            llm=built["chat_assembler"].provider_name,
            llm_available=built.get("llm_available", False),
        )

        yield

        _logger.info("app_shutdown")

    application = FastAPI(
        title="esploraCitta API",
        version="0.1.0",
        description=(
            "Directory of Italian cities and places: browse, filter and sort "
            "listings, read and write reviews, and ask an AI assistant about "
            "any place."
        ),
        lifespan=_lifespan,
    )

    # -- Middleware (order matters: last added = first executed) --
    application.add_middleware(ErrorHandlingMiddleware)
    application.add_middleware(RequestLoggingMiddleware)
    configure_cors(application, allowed_origins=app_settings.cors_allowed_origins)
    register_exception_handlers(application)

    # -- API routes --
    application.include_router(api_router)

    return application


app = create_app()

# ---------------------------------------------------------------------------
# CLI entry point
# ---------------------------------------------------------------------------

if __name__ == "__main__":
    uvicorn.run(
        "src.main:app",
        host=settings.app_host,
        port=settings.app_port,
        reload=(settings.app_env == "development"),
    )
