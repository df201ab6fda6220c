"""Application configuration utilities."""

from .settings import (
    DEFAULT_CORS_HEADERS,
    DEFAULT_CORS_METHODS,
    DEFAULT_OPENAI_MODEL,
    Settings,
    get_settings,
)

__all__ = [
    "DEFAULT_CORS_HEADERS",
    "DEFAULT_CORS_METHODS",
    "DEFAULT_OPENAI_MODEL",
    "Settings",
    "get_settings",
]
