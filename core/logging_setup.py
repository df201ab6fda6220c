"""Logging configuration for Spendlens.

Entrypoints call :func:`configure_logging` once at startup. Library modules
only call ``get_logger("spendlens.<module>")`` and never attach handlers.
"""

from __future__ import annotations

import logging
import os
import sys
from typing import IO

__all__ = ["LOGGER_NAME", "configure_logging", "get_logger"]

LOGGER_NAME = "spendlens"
LEVEL_ENV_VAR = "SPENDLENS_LOG_LEVEL"
DEFAULT_FORMAT = "%(asctime)s %(name)s %(levelname)s %(message)s"

_configured = False


def _resolve_level(level: int | str | None) -> int:
    if isinstance(level, int):
        return level
    if level is None:
        level = os.getenv(LEVEL_ENV_VAR)
    if isinstance(level, str):
        name = level.strip().upper()
        if name.isdigit():
            return int(name)
        numeric = logging.getLevelName(name)
        if isinstance(numeric, int):
            return numeric
    return logging.INFO


def configure_logging(
    level: int | str | None = None,
    *,
    fmt: str = DEFAULT_FORMAT,
    stream: IO[str] = sys.stderr,
) -> None:
    """Attach a single stream handler to the ``spendlens`` logger.

    Repeated calls only update the level.
    """

    global _configured
    logger = logging.getLogger(LOGGER_NAME)
    resolved = _resolve_level(level)
    logger.setLevel(resolved)

    if _configured:
        return

    for handler in list(logger.handlers):
        if isinstance(handler, logging.NullHandler):
            logger.removeHandler(handler)

    handler = logging.StreamHandler(stream)
    handler.setFormatter(logging.Formatter(fmt))
    logger.addHandler(handler)
    logger.propagate = False
    _configured = True


def get_logger(name: str) -> logging.Logger:
    """Return ``name``'s logger, silent until :func:`configure_logging` runs."""

    root = logging.getLogger(LOGGER_NAME)
    if not _configured and not root.handlers:
        root.addHandler(logging.NullHandler())
    return logging.getLogger(name)
