"""LLM provider adapters.

OpenAILLMProvider is the one concrete ILLMProvider
(src/interfaces/llm_provider.py).  It also covers OpenAI-compatible
endpoints through OPENAI_BASE_URL.  main.py builds it at startup and
hands it to the ChatContextAssembler.
"""

from src.providers.llm.openai_provider import OpenAILLMProvider

__all__ = ["OpenAILLMProvider"]
