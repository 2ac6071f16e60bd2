"""Application settings loaded from environment variables via pydantic-settings.

# ─── HOW SETTINGS WORK ─────────────────────────────────────────────────
#
# Values are resolved in priority order:
#
#   1. Environment variables, e.g. OPENAI_API_KEY=sk-abc123
#   2. The project-root .env file (local development only, never committed)
#   3. The defaults declared on the class below
#
# Field ``openai_chat_model`` maps to env var ``OPENAI_CHAT_MODEL``;
# pydantic-settings upper-cases and matches automatically.  List fields
# such as ``cors_allowed_origins`` are read as JSON
# (CORS_ALLOWED_ORIGINS='["https://example.it"]').
# ──────────────────────────────────────────────────────────────────────
"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """esploraCitta application settings.

    Environment variables override defaults. Loaded from .env file when present.
    """

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    # === Chat assistant (OpenAI-compatible) ===
    # An empty key is accepted: the client is still built and every chat
    # call fails, so the assistant answers with its fallback reply.
    openai_api_key: str = ""
    openai_base_url: str = ""  # Custom base URL for OpenAI-compatible APIs
    openai_chat_model: str = "gpt-4o"
    chat_temperature: float = 0.7
    chat_max_tokens: int = 500
    llm_timeout_seconds: float = 30.0
    # 0 = one attempt per user message, no SDK-level retries.
    llm_max_retries: int = 0

    # === Directory data ===
    # Load the sample cities/places/reviews when the store is created.
    seed_data: bool = True

    # === App Config ===
    app_host: str = "0.0.0.0"
    app_port: int = 8000
    app_env: str = "development"
    log_level: str = "INFO"
    cors_allowed_origins: list[str] = ["*"]

    def get_available_llm_providers(self) -> list[str]:
        """Return the LLM provider names that have an API key configured."""
        providers: list[str] = []
        if self.openai_api_key:
            providers.append("openai-compatible" if self.openai_base_url else "openai")
        return providers
