"""FastAPI relay for an OpenAI-compatible chat-completion provider.

Endpoints:
- GET /health
- GET /api/models
- GET /api/templates
- POST /api/generate  { "model": "...", "systemPrompt": "...", "userPrompt": "..." }
- everything else: the static browser page
"""
from __future__ import annotations
import logging
from typing import Any

import httpx
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from prompt_builder.common.config import Settings, load_models
from prompt_builder.common.logging_setup import setup_logging
from prompt_builder.common.schema import GenerationRequest, GenerationResult, ModelOption
from prompt_builder.common.templates import system_prompts

LOGGER = logging.getLogger("prompt_builder.relay.app")

MISSING_FIELDS_MESSAGE = "Missing required fields: model, systemPrompt, userPrompt"
NOT_CONFIGURED_MESSAGE = "OPENROUTER_API_KEY not configured on server"
NO_RESPONSE_MESSAGE = "No response generated."


class RelayError(Exception):
    """A failure rendered to the caller as {"error": message} with the given status."""

    def __init__(self, status_code: int, message: str) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.message = message


def _upstream_error_message(response: httpx.Response) -> str:
    """Pull error.message out of a provider error body, else a generic message."""
    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, dict):
        err = body.get("error")
        if isinstance(err, dict) and err.get("message"):
            return str(err["message"])
    return f"Upstream provider returned status {response.status_code}"


def _extract_content(data: Any) -> str:
    try:
        content = data["choices"][0]["message"]["content"]
    except (KeyError, IndexError, TypeError):
        return NO_RESPONSE_MESSAGE
    if isinstance(content, str) and content:
        return content
    return NO_RESPONSE_MESSAGE


def create_app(settings: Settings, transport: httpx.AsyncBaseTransport | None = None) -> FastAPI:
    """
    Build the relay application.

    Args:
        settings: Startup configuration, including the provider credential.
        transport: Optional httpx transport for upstream calls (tests pass a mock).
    """
    app = FastAPI(title="Prompt Builder")
    models = load_models(settings.models_path)

    @app.exception_handler(RelayError)
    async def _relay_error(request: Request, exc: RelayError) -> JSONResponse:
        return JSONResponse(status_code=exc.status_code, content={"error": exc.message})

    @app.exception_handler(RequestValidationError)
    async def _invalid_body(request: Request, exc: RequestValidationError) -> JSONResponse:
        return JSONResponse(status_code=400, content={"error": MISSING_FIELDS_MESSAGE})

    @app.get("/health")
    def health() -> dict[str, Any]:
        return {"status": "ok", "configured": settings.configured}

    @app.get("/api/models", response_model=list[ModelOption])
    def list_models() -> list[ModelOption]:
        return models

    @app.get("/api/templates")
    def templates() -> dict[str, str]:
        return system_prompts()

    @app.post("/api/generate", response_model=GenerationResult)
    async def generate(body: GenerationRequest) -> GenerationResult:
        if not settings.configured:
            LOGGER.error("Generation requested but OPENROUTER_API_KEY is not set")
            raise RelayError(500, NOT_CONFIGURED_MESSAGE)
        if body.missing_fields():
            raise RelayError(400, MISSING_FIELDS_MESSAGE)

        headers = {
            "Authorization": f"Bearer {settings.api_key}",
            "HTTP-Referer": settings.referer,
            "X-Title": settings.title,
        }
        payload = {
            "model": body.model,
            "messages": [
                {"role": "system", "content": body.systemPrompt},
                {"role": "user", "content": body.userPrompt},
            ],
            "max_tokens": settings.max_tokens,
            "temperature": settings.temperature,
        }

        try:
            async with httpx.AsyncClient(timeout=settings.upstream_timeout, transport=transport) as client:
                r = await client.post(settings.upstream_url, headers=headers, json=payload)
        except httpx.TimeoutException as e:
            LOGGER.error("Upstream request timed out: %s", e)
            raise RelayError(504, f"Upstream request timed out after {settings.upstream_timeout:g} seconds")
        except httpx.HTTPError as e:
            LOGGER.error("Upstream request failed: %s", e)
            raise RelayError(500, str(e) or type(e).__name__)

        if not r.is_success:
            message = _upstream_error_message(r)
            LOGGER.warning("Upstream returned %s: %s", r.status_code, message)
            raise RelayError(r.status_code, message)

        try:
            data = r.json()
        except ValueError as e:
            LOGGER.error("Malformed upstream response: %s", e)
            raise RelayError(500, str(e))

        model = data.get("model") if isinstance(data, dict) else None
        if not isinstance(model, str):
            model = None
        return GenerationResult(content=_extract_content(data), model=model)

    app.mount("/", StaticFiles(directory=settings.static_dir, html=True), name="static")
    return app


setup_logging()
app = create_app(Settings.from_env())
