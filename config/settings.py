"""Centralised configuration handling for Spendlens."""

from __future__ import annotations

from functools import lru_cache
from typing import Any

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_OPENAI_MODEL = "gpt-4o-mini"
DEFAULT_CORS_METHODS = ("GET", "POST", "PUT", "DELETE", "OPTIONS")
DEFAULT_CORS_HEADERS = ("Content-Type", "Authorization")


class Settings(BaseSettings):
    """Service settings sourced from ``SPENDLENS_*`` environment variables.

    The OpenAI credentials also accept the SDK's conventional
    ``OPENAI_API_KEY`` / ``OPENAI_BASE_URL`` names.
    """

    openai_api_key: str | None = Field(
        default=None,
        validation_alias=AliasChoices("SPENDLENS_OPENAI_API_KEY", "OPENAI_API_KEY", "openai_api_key"),
    )
    openai_base_url: str | None = Field(
        default=None,
        validation_alias=AliasChoices("SPENDLENS_OPENAI_BASE_URL", "OPENAI_BASE_URL", "openai_base_url"),
    )
    openai_model: str = DEFAULT_OPENAI_MODEL

    analysis_temperature: float = 0.1
    analysis_top_p: float = 0.95
    analysis_max_output_tokens: int = 8192
    reflection_temperature: float = 0.7

    file_poll_interval: float = Field(default=2.0, gt=0)
    file_poll_timeout: float = Field(default=60.0, gt=0)

    cors_origins: list[str] = Field(default_factory=lambda: ["*"])
    environment: str = "production"
    log_level: str = "INFO"
    host: str = "0.0.0.0"
    port: int = 8000

    model_config = SettingsConfigDict(env_prefix="SPENDLENS_", extra="ignore", populate_by_name=True)

    @property
    def is_development(self) -> bool:
        return self.environment.strip().lower() == "development"

    @property
    def openai_client_kwargs(self) -> dict[str, Any]:
        kwargs: dict[str, Any] = {}
        if self.openai_api_key:
            kwargs["api_key"] = self.openai_api_key
        if self.openai_base_url:
            kwargs["base_url"] = self.openai_base_url
        return kwargs


@lru_cache
def get_settings() -> Settings:
    """Load and cache settings for the process entrypoint."""

    return Settings()
