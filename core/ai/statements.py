"""Bank statement analysis: upload, model call and recalculation."""

from __future__ import annotations

import json
import time
from typing import Any, Callable, Optional, Sequence

from openai import APIError, OpenAI

from analytics.metrics import recalculate_analysis
from config import Settings
from core.ai.client import (
    ClientFactory,
    extract_output_text,
    resolve_openai_client,
    upload_statement,
    wait_for_file_ready,
)
from core.ai.schema import build_analysis_response_format
from core.errors import StatementAnalysisError
from core.logging_setup import get_logger
from core.models import PERIOD_KEYS, PeriodSummary, StatementFile
from prompts import PROMPT_STATEMENTS_SYSTEM, PROMPT_STATEMENTS_USER, get_prompt_text, render_prompt

__all__ = ["build_analysis_input", "parse_analysis_output", "analyse_statements"]

_logger = get_logger("spendlens.statements")


def build_analysis_input(uploaded_files: Sequence[Any]) -> list[dict[str, Any]]:
    """Return the Responses API ``input`` referencing every uploaded file."""

    content: list[dict[str, Any]] = [
        {
            "type": "input_text",
            "text": render_prompt(PROMPT_STATEMENTS_USER, file_count=len(uploaded_files)),
        }
    ]
    for uploaded in uploaded_files:
        content.append({"type": "input_file", "file_id": uploaded.id})
    return [{"role": "user", "content": content}]


def parse_analysis_output(text: str) -> dict[str, Any]:
    """Decode the model output into a mapping of periods.

    Missing periods are left to :func:`~analytics.metrics.recalculate_analysis`,
    which substitutes an empty summary for them.
    """

    if not text.strip():
        raise StatementAnalysisError("OpenAI response was empty")
    try:
        decoded = json.loads(text)
    except json.JSONDecodeError as exc:
        raise StatementAnalysisError(f"OpenAI response was not valid JSON: {exc}") from exc

    if not isinstance(decoded, dict):
        raise StatementAnalysisError("OpenAI response was not a JSON object")
    absent = [key for key in PERIOD_KEYS if key not in decoded]
    if absent:
        _logger.warning("statements:periods_absent periods=%s", ",".join(absent))
    return decoded


def analyse_statements(
    files: Sequence[StatementFile],
    *,
    settings: Settings,
    client_factory: Optional[ClientFactory] = None,
    sleep: Callable[[float], None] = time.sleep,
) -> dict[str, PeriodSummary]:
    """Analyse statement files and return recalculated weekly/monthly/yearly summaries."""

    if not files:
        raise StatementAnalysisError("Missing files")

    client: OpenAI = (
        client_factory() if client_factory else resolve_openai_client(settings, StatementAnalysisError)
    )

    t0 = time.perf_counter()
    try:
        uploaded = [upload_statement(client, statement) for statement in files]
        for item in uploaded:
            wait_for_file_ready(
                client,
                item.id,
                interval=settings.file_poll_interval,
                timeout=settings.file_poll_timeout,
                sleep=sleep,
            )

        response = client.responses.create(
            model=settings.openai_model,
            instructions=get_prompt_text(PROMPT_STATEMENTS_SYSTEM),
            input=build_analysis_input(uploaded),
            temperature=settings.analysis_temperature,
            top_p=settings.analysis_top_p,
            max_output_tokens=settings.analysis_max_output_tokens,
            text={"format": build_analysis_response_format()},
        )
    except APIError as exc:
        raise StatementAnalysisError(f"OpenAI API error: {exc}") from exc

    analysis = parse_analysis_output(extract_output_text(response))
    _logger.info(
        "statements:analysed files=%d latency_ms=%.2f",
        len(files),
        (time.perf_counter() - t0) * 1000.0,
    )
    return recalculate_analysis(analysis)
