"""Spendlens HTTP API."""

from __future__ import annotations

import traceback
from typing import Any, Optional

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.concurrency import run_in_threadpool
from starlette.datastructures import UploadFile

from app.schemas import PurchaseRequest
from config import DEFAULT_CORS_HEADERS, DEFAULT_CORS_METHODS, Settings, get_settings
from core.ai.client import ClientFactory
from core.ai.reflections import generate_reflections
from core.ai.statements import analyse_statements
from core.logging_setup import configure_logging, get_logger
from core.models import DEFAULT_MIME_TYPE, StatementFile

__all__ = ["create_app", "main"]

FILES_FIELD = "files"

_logger = get_logger("spendlens.server")


def _error_response(status_code: int, message: str, stack: Optional[str] = None) -> JSONResponse:
    body: dict[str, Any] = {"success": False, "error": message}
    if stack is not None:
        body["stack"] = stack
    return JSONResponse(body, status_code=status_code)


def _failure(exc: Exception, settings: Settings) -> JSONResponse:
    stack = traceback.format_exc() if settings.is_development else None
    return _error_response(500, str(exc) or exc.__class__.__name__, stack)


async def _read_statements(request: Request) -> list[StatementFile]:
    """Return the uploaded files of the ``files`` form field; other entries are ignored."""

    form = await request.form()
    statements: list[StatementFile] = []
    for entry in form.getlist(FILES_FIELD):
        if not isinstance(entry, UploadFile):
            continue
        statements.append(
            StatementFile(
                filename=entry.filename or "statement.pdf",
                content=await entry.read(),
                mime_type=entry.content_type or DEFAULT_MIME_TYPE,
            )
        )
    return statements


def create_app(
    settings: Optional[Settings] = None,
    *,
    client_factory: Optional[ClientFactory] = None,
) -> FastAPI:
    """Build the API with explicit settings and an optional OpenAI client factory."""

    settings = settings or get_settings()
    api = FastAPI(title="Spendlens", summary="Bank statement spending analysis", docs_url="/")
    api.state.settings = settings
    api.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=list(DEFAULT_CORS_METHODS),
        allow_headers=list(DEFAULT_CORS_HEADERS),
    )

    @api.exception_handler(RequestValidationError)
    async def _invalid_request(_: Request, exc: RequestValidationError) -> JSONResponse:
        messages = [
            f"{'.'.join(str(part) for part in error.get('loc', ()))}: {error.get('msg', '')}"
            for error in exc.errors()
        ]
        return _error_response(400, "Invalid request: " + "; ".join(messages))

    @api.get("/health")
    def health() -> dict[str, str]:
        return {"status": "ok"}

    @api.post("/api/statements", tags=["Statements"])
    async def process_statements(request: Request) -> JSONResponse:
        """Analyse uploaded statements into weekly, monthly and yearly summaries."""

        try:
            statements = await _read_statements(request)
            if not statements:
                return _error_response(400, "Missing files")

            result = await run_in_threadpool(
                analyse_statements,
                statements,
                settings=settings,
                client_factory=client_factory,
            )
        except Exception as exc:  # noqa: BLE001 - reported to the caller as an envelope
            _logger.exception("statements:failed error=%s", exc.__class__.__name__)
            return _failure(exc, settings)

        return JSONResponse({"success": True, "result": result})

    @api.post("/api/reflections", tags=["Reflections"])
    def create_reflections(purchase: PurchaseRequest) -> JSONResponse:
        """Generate reflection prompts for a purchase the user is considering."""

        try:
            prompts = generate_reflections(
                purchase.to_context(),
                settings=settings,
                client_factory=client_factory,
            )
        except Exception as exc:  # noqa: BLE001 - reported to the caller as an envelope
            _logger.exception("reflections:failed error=%s", exc.__class__.__name__)
            return _failure(exc, settings)

        return JSONResponse({"success": True, "result": prompts})

    return api


def main() -> None:
    """Run the API under uvicorn."""

    settings = get_settings()
    configure_logging(settings.log_level)
    _logger.info("server:start host=%s port=%d environment=%s", settings.host, settings.port, settings.environment)
    uvicorn.run(create_app(settings), host=settings.host, port=settings.port, log_level=settings.log_level.lower())
