"""OpenAI-compatible chat-completion adapter.

Wraps the ``openai`` async client to implement :class:`ILLMProvider`.
When ``openai_base_url`` is configured the client talks to that
OpenAI-compatible endpoint instead of api.openai.com.
"""

from __future__ import annotations

import openai
import structlog

from src.config.settings import Settings
from src.interfaces.llm_provider import ILLMProvider
from src.utils.errors import LLMError

logger = structlog.get_logger(logger_name=__name__)


class OpenAILLMProvider(ILLMProvider):
    """Chat provider backed by an OpenAI-compatible API.

    The rest of the application only sees :class:`ILLMProvider`; the
    openai SDK and its exception types stay inside this class.
    """

    def __init__(self, settings: Settings) -> None:
        self._settings = settings
        self._api_key = settings.openai_api_key

        # The request timeout bounds the only blocking call a chat request
        # makes.  max_retries=0 keeps one provider attempt per user message.
        client_kwargs: dict = {
            "api_key": self._api_key,
            "timeout": openai.Timeout(settings.llm_timeout_seconds, connect=5.0),
            "max_retries": settings.llm_max_retries,
        }
        if settings.openai_base_url:
            client_kwargs["base_url"] = settings.openai_base_url

        # Recent SDKs refuse to build a client without credentials.  The
        # provider then stays unavailable and every chat call raises LLMError.
        self._client: openai.AsyncOpenAI | None
        try:
            self._client = openai.AsyncOpenAI(**client_kwargs)
        except openai.OpenAIError as exc:
            logger.warning("openai_client_unavailable", error=str(exc))
            self._client = None
        self._model = settings.openai_chat_model
        self._provider_label = (
            "openai-compatible" if settings.openai_base_url else "openai"
        )

    # ------------------------------------------------------------------
    # ILLMProvider implementation
    # ------------------------------------------------------------------

    async def chat(
        self,
        messages: list[dict[str, str]],
        temperature: float = 0.7,
        max_tokens: int = 500,
    ) -> str:
        """Run one chat completion and return the first choice's text.

        A ``None`` content is returned as ``""`` so the caller can tell an
        empty answer apart from a failed call.
        """
        if self._client is None:
            raise LLMError(
                message=f"{self._provider_label} client is not configured (missing API key)",
                provider_name=self.get_provider_name(),
            )

        try:
            response = await self._client.chat.completions.create(
                model=self._model,
                messages=messages,
                temperature=temperature,
                max_tokens=max_tokens,
            )
        except openai.APITimeoutError as exc:
            raise LLMError(
                message=f"{self._provider_label} timed out after {self._settings.llm_timeout_seconds:g}s",
                provider_name=self.get_provider_name(),
            ) from exc
        except openai.APIError as exc:
            raise LLMError(
                message=f"{self._provider_label} API error: {exc}",
                provider_name=self.get_provider_name(),
            ) from exc

        try:
            content = response.choices[0].message.content
        except (AttributeError, IndexError, TypeError) as exc:
            raise LLMError(
                message=f"{self._provider_label} returned a malformed response",
                provider_name=self.get_provider_name(),
            ) from exc

        logger.info(
            "openai_chat_completion",
            model=self._model,
            provider=self._provider_label,
            messages=len(messages),
            tokens=response.usage.total_tokens if response.usage else None,
        )
        return content or ""

    def is_available(self) -> bool:
        """Return ``True`` if an API key is configured (doesn't verify it works)."""
        return bool(self._api_key) and self._client is not None

    async def validate_credentials(self) -> bool:
        """List models to check the key without paying for an inference call."""
        if self._client is None or not self.is_available():
            return False
        try:
            await self._client.models.list()
            return True
        except openai.APIError:
            return False

    def get_provider_name(self) -> str:
        return self._provider_label
