"""Utility modules for esploraCitta.

- **errors** -- Exception hierarchy rooted at EsploraError; store and
  provider failures raise their own subclass so callers can handle them
  without broad ``except Exception`` blocks.
- **logging** -- structlog setup with a dual-renderer pattern: coloured
  console output in development, structured JSON in production.
"""

from src.utils.errors import (
    ConfigurationError,
    EsploraError,
    LLMError,
    PlaceNotFoundError,
    StoreError,
)
from src.utils.logging import configure_logging, get_logger

__all__ = [
    "ConfigurationError",
    "EsploraError",
    "LLMError",
    "PlaceNotFoundError",
    "StoreError",
    "configure_logging",
    "get_logger",
]
