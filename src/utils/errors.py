"""Custom exception hierarchy for esploraCitta.

All application exceptions inherit from :class:`EsploraError`, which
carries an optional ``provider_name`` so error handlers can tell which
external service (e.g. "openai") caused the failure.

    EsploraError  (base)
    +-- LLMError                 (chat completion call failed / malformed reply)
    +-- ConfigurationError       (unreadable or malformed config file)
    +-- StoreError               (unexpected entity-store failure)
        +-- PlaceNotFoundError   (write referencing a missing place)

Not-found on reads is NOT an exception: the store returns ``None`` and the
route turns that into a 404.
"""


class EsploraError(Exception):
    """Base exception for all esploraCitta errors.

    ``__str__`` prefixes the provider name in brackets for log output,
    e.g. ``[openai] API error: ...``.
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        provider_name: str | None = None,
    ) -> None:
        self._message = message
        self._provider_name = provider_name
        super().__init__(self._message)

    @property
    def message(self) -> str:
        return self._message

    @property
    def provider_name(self) -> str | None:
        return self._provider_name

    def __str__(self) -> str:
        if self._provider_name:
            return f"[{self._provider_name}] {self._message}"
        return self._message


# ---------------------------------------------------------------------------
# External service / provider errors
# ---------------------------------------------------------------------------

class LLMError(EsploraError):
    """Raised when an LLM API call fails or returns an unusable response."""

    def __init__(
        self,
        message: str = "LLM API call failed",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


# ---------------------------------------------------------------------------
# Configuration / storage errors
# ---------------------------------------------------------------------------

class ConfigurationError(EsploraError):
    """Raised when configuration is invalid or missing at startup."""

    def __init__(
        self,
        message: str = "Invalid or missing configuration",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


class StoreError(EsploraError):
    """Raised when the entity store cannot complete a write."""

    def __init__(
        self,
        message: str = "Entity store operation failed",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


class PlaceNotFoundError(StoreError):
    """Raised when a review is written for a place id the store does not hold."""

    def __init__(self, place_id: int, provider_name: str | None = None) -> None:
        self._place_id = place_id
        super().__init__(message=f"Place {place_id} not found", provider_name=provider_name)

    @property
    def place_id(self) -> int:
        return self._place_id
