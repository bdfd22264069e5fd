"""
Settings - Application configuration using Pydantic Settings.

Loads from environment variables and .env files.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings."""

    # Perplexity (query enhancement). No key -> enhancement disabled, search still works
    perplexity_api_key: str | None = None
    perplexity_api_url: str = "https://api.perplexity.ai/chat/completions"
    perplexity_model: str = "llama-3.1-sonar-small-128k-online"
    perplexity_temperature: float = 0.2
    perplexity_max_tokens: int = 1024
    perplexity_timeout_seconds: float = 30.0

    # Paths
    db_path: Path = Path("data/gscnews.db")

    # Search
    search_default_limit: int = 10

    # API
    api_host: str = "0.0.0.0"
    api_port: int = 8000
    api_debug: bool = False

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @property
    def enhancement_configured(self) -> bool:
        """True when a completion API credential is present."""
        return bool(self.perplexity_api_key and self.perplexity_api_key.strip())


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
