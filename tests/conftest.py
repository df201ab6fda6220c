"""Shared fixtures: explicit settings and a stub OpenAI client."""

from __future__ import annotations

import json
import sys
from pathlib import Path
from types import SimpleNamespace
from typing import Any, Callable

import httpx
import pytest
from openai import APIError

ROOT = Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from config import Settings  # noqa: E402


class StubOpenAI:
    """Minimal stand-in for ``openai.OpenAI`` covering ``files`` and ``responses``.

    ``statuses`` maps a file id to the statuses returned by successive
    ``files.retrieve`` calls; the last status repeats. Unknown ids report
    ``processed``.
    """

    def __init__(
        self,
        output: Any = None,
        *,
        statuses: dict[str, list[str]] | None = None,
        error: Exception | None = None,
    ) -> None:
        self.output_text = output if isinstance(output, str) or output is None else json.dumps(output)
        self.statuses = statuses or {}
        self.error = error
        self.uploads: list[dict[str, Any]] = []
        self.retrievals: list[str] = []
        self.calls: list[dict[str, Any]] = []

        outer = self

        class _Files:
            def create(self, **kwargs: Any) -> SimpleNamespace:
                outer.uploads.append(kwargs)
                return SimpleNamespace(id=f"file-{len(outer.uploads)}", status="uploaded")

            def retrieve(self, file_id: str) -> SimpleNamespace:
                outer.retrievals.append(file_id)
                queue = outer.statuses.get(file_id)
                if not queue:
                    return SimpleNamespace(id=file_id, status="processed", status_details=None)
                status = queue.pop(0) if len(queue) > 1 else queue[0]
                return SimpleNamespace(id=file_id, status=status, status_details=f"{status} details")

        class _Responses:
            def create(self, **kwargs: Any) -> SimpleNamespace:
                outer.calls.append(kwargs)
                if outer.error is not None:
                    raise outer.error
                return SimpleNamespace(output_text=outer.output_text or "", output=[])

        self.files = _Files()
        self.responses = _Responses()

    def factory(self) -> Callable[[], "StubOpenAI"]:
        return lambda: self


def make_api_error(message: str = "upstream failure") -> APIError:
    request = httpx.Request("POST", "https://api.openai.com/v1/responses")
    return APIError(message, request, body=None)


@pytest.fixture()
def settings() -> Settings:
    return Settings(
        openai_api_key="test-key",
        openai_model="test-model",
        file_poll_interval=1.0,
        file_poll_timeout=3.0,
    )


@pytest.fixture()
def sleeps() -> list[float]:
    """Delays recorded by passing ``sleeps.append`` in place of ``time.sleep``."""

    return []


@pytest.fixture()
def sample_period() -> dict[str, Any]:
    return {
        "period": "2024-01-01 to 2024-01-31",
        "currency": "£",
        "transactions": [
            {"date": "2024-01-02", "description": "Tesco", "amount": -42.5, "category": "Groceries", "emoji": "🛒"},
            {"date": "2024-01-03", "description": "Netflix", "amount": -15.99, "category": "Entertainment", "emoji": "🎬"},
            {"date": "2024-01-05", "description": "Employer Ltd", "amount": 2000.0, "category": "Income", "emoji": "💰"},
            {"date": "2024-01-09", "description": "Sainsbury's", "amount": -17.5, "category": "Groceries", "emoji": "🥦"},
            {"date": "2024-01-12", "description": "TfL", "amount": -24.0, "category": "Transport", "emoji": "🚇"},
        ],
        "possibleSubscriptions": [
            {"name": "Netflix", "amount": -15.99, "emoji": "🎬"},
        ],
    }


@pytest.fixture()
def model_output(sample_period) -> dict[str, Any]:
    weekly = {
        "period": "2024-01-06 to 2024-01-12",
        "currency": "£",
        "transactions": sample_period["transactions"][3:],
        "possibleSubscriptions": [],
    }
    return {"weekly": weekly, "monthly": sample_period, "yearly": sample_period}
