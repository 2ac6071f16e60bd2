"""YAML configuration loader with environment variable overrides.

# ─── CONFIGURATION HIERARCHY ───────────────────────────────────────────
#
#   1. config/config.yaml  — static defaults checked into the repo
#   2. .env file           — local developer overrides (not committed)
#   3. Environment vars    — set by the deployment
#
# load_config() reads the YAML file first, then deep-merges the values
# resolved by Settings on top, so an env var always wins over YAML.
# ──────────────────────────────────────────────────────────────────────
"""

from pathlib import Path

import yaml

from src.config.settings import Settings
from src.utils.errors import ConfigurationError


def load_config(path: str = "config/config.yaml", settings: Settings | None = None) -> dict:
    """Load YAML config and merge with environment-based Settings.

    Args:
        path: Path to the YAML configuration file.  A missing file yields
              an empty base layer.
        settings: Pre-built settings; a fresh ``Settings()`` is used when omitted.

    Returns:
        Fully resolved configuration dictionary.

    Raises:
        ConfigurationError: The file exists but cannot be read, is not
            valid YAML, or does not hold a mapping at the top level.
    """
    config_path = Path(path)
    if config_path.exists():
        try:
            with open(config_path, encoding="utf-8") as f:
                yaml_config = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as exc:
            raise ConfigurationError(f"Cannot read {config_path}: {exc}") from exc
        if not isinstance(yaml_config, dict):
            raise ConfigurationError(
                f"{config_path} must contain a mapping, got {type(yaml_config).__name__}"
            )
    else:
        yaml_config = {}

    settings = settings or Settings()
    env_overrides = {
        "app": {
            "host": settings.app_host,
            "port": settings.app_port,
            "env": settings.app_env,
            "cors_allowed_origins": settings.cors_allowed_origins,
        },
        "chat": {
            "model": settings.openai_chat_model,
            "temperature": settings.chat_temperature,
            "max_tokens": settings.chat_max_tokens,
            "timeout_seconds": settings.llm_timeout_seconds,
            "max_retries": settings.llm_max_retries,
            "available_providers": settings.get_available_llm_providers(),
        },
        "store": {
            "seed_data": settings.seed_data,
        },
        "logging": {
            "level": settings.log_level,
        },
    }

    _deep_merge(yaml_config, env_overrides)
    return yaml_config


def _deep_merge(base: dict, overrides: dict) -> None:
    """Recursively merge overrides into base dict, mutating base in place."""
    for key, value in overrides.items():
        if key in base and isinstance(base[key], dict) and isinstance(value, dict):
            _deep_merge(base[key], value)
        else:
            base[key] = value
