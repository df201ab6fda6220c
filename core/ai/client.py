"""OpenAI client construction, file uploads and response decoding."""

from __future__ import annotations

import math
import time
from typing import Any, Callable

from openai import OpenAI

from config import Settings
from core.errors import FileProcessingError, FileProcessingTimeout, SpendlensError
from core.logging_setup import get_logger
from core.models import StatementFile

__all__ = [
    "ClientFactory",
    "READY_STATUSES",
    "FAILED_STATUSES",
    "resolve_openai_client",
    "upload_statement",
    "wait_for_file_ready",
    "extract_output_text",
]

ClientFactory = Callable[[], OpenAI]

READY_STATUSES = frozenset({"processed"})
FAILED_STATUSES = frozenset({"error"})
UPLOAD_PURPOSE = "user_data"

_logger = get_logger("spendlens.client")


def resolve_openai_client(settings: Settings, error_cls: type[SpendlensError] = SpendlensError) -> OpenAI:
    """Build an OpenAI client from explicit settings."""

    kwargs = settings.openai_client_kwargs
    if "api_key" not in kwargs:
        raise error_cls("Missing OpenAI API key. Set OPENAI_API_KEY or SPENDLENS_OPENAI_API_KEY.")
    return OpenAI(**kwargs)


def upload_statement(client: OpenAI, statement: StatementFile) -> Any:
    """Upload one statement and return the SDK file object."""

    uploaded = client.files.create(
        file=(statement.filename, statement.content, statement.mime_type),
        purpose=UPLOAD_PURPOSE,
    )
    _logger.info(
        "upload:done file_id=%s filename=%s bytes=%d",
        uploaded.id,
        statement.filename,
        len(statement.content),
    )
    return uploaded


def wait_for_file_ready(
    client: OpenAI,
    file_id: str,
    *,
    interval: float,
    timeout: float,
    sleep: Callable[[float], None] = time.sleep,
) -> Any:
    """Poll ``file_id`` until the provider reports it processed.

    Checks run every ``interval`` seconds for at most ``timeout`` seconds.
    Raises :class:`FileProcessingError` when the file fails and
    :class:`FileProcessingTimeout` when it never becomes ready.
    """

    max_attempts = int(math.ceil(timeout / interval)) + 1
    for attempt in range(1, max_attempts + 1):
        file_obj = client.files.retrieve(file_id)
        status = getattr(file_obj, "status", None)
        # Providers that do not report a status serve the file immediately.
        if status is None or status in READY_STATUSES:
            _logger.debug("upload:ready file_id=%s attempts=%d", file_id, attempt)
            return file_obj
        if status in FAILED_STATUSES:
            details = getattr(file_obj, "status_details", None) or "no details"
            raise FileProcessingError(file_id, f"File {file_id} failed processing: {details}")
        if attempt < max_attempts:
            _logger.debug("upload:pending file_id=%s status=%s attempt=%d", file_id, status, attempt)
            sleep(interval)

    waited = interval * (max_attempts - 1)
    _logger.warning("upload:timeout file_id=%s waited=%.1f attempts=%d", file_id, waited, max_attempts)
    raise FileProcessingTimeout(file_id, waited=waited, attempts=max_attempts)


def extract_output_text(response: Any) -> str:
    """Return the text output of a Responses API result.

    Prefers ``output_text`` and falls back to the first content block.
    """

    text = getattr(response, "output_text", None)
    if isinstance(text, str) and text.strip():
        return text

    try:
        first = response.output[0]
        block = first.content[0]
    except (AttributeError, IndexError, TypeError):
        return ""
    value = getattr(block, "text", None)
    return value if isinstance(value, str) else ""
