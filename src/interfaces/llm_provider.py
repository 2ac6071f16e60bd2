"""Abstract base class for chat-completion providers.

Defines the contract for any large-language-model backend the place
assistant can talk to.  Implementations may wrap OpenAI or any
OpenAI-compatible endpoint; the assistant never imports an SDK directly.
"""

from __future__ import annotations

from abc import ABC, abstractmethod


# Concrete implementation: OpenAILLMProvider (src/providers/llm/)
class ILLMProvider(ABC):
    """Contract for chat-completion services."""

    @abstractmethod
    async def chat(
        self,
        messages: list[dict[str, str]],
        temperature: float = 0.7,
        max_tokens: int = 500,
    ) -> str:
        """Send an ordered message list and return the model's reply.

        Parameters
        ----------
        messages:
            ``{"role": ..., "content": ...}`` dicts in conversation order;
            the first entry is normally the system prompt.
        temperature:
            Sampling temperature (0.0 = deterministic, 1.0 = creative).
        max_tokens:
            Upper bound on the number of tokens in the reply.

        Returns
        -------
        str
            The reply text.  An empty string means the provider answered
            without content.

        Raises
        ------
        src.utils.errors.LLMError
            If the API call fails, times out, or the response is malformed.
        """

    @abstractmethod
    def get_provider_name(self) -> str:
        """Return a human-readable identifier, e.g. ``"openai"``."""

    @abstractmethod
    def is_available(self) -> bool:
        """Return ``True`` if credentials are configured.

        Must not make a network call.
        """

    @abstractmethod
    async def validate_credentials(self) -> bool:
        """Perform a lightweight API call to confirm credentials are valid."""
