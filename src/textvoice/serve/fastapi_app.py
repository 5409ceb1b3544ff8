"""FastAPI app for combined text + speech generation.

Endpoints:
- GET /health
- POST /api/call-api  { "prompt": "...", "generateAudio": true, ... }
- POST /api/text      { "prompt": "...", "model": "..." }
"""
from __future__ import annotations
import logging
from typing import Any, Callable

from fastapi import Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse

from textvoice.clients.elevenlabs import ElevenLabsClient
from textvoice.clients.gemini import GeminiClient
from textvoice.common.config import Settings, get_settings
from textvoice.common.errors import ApiError, ErrorCode, InvalidRequestError, handle_api_error
from textvoice.common.logging_setup import setup_logging
from textvoice.common.schema import (
    CombinedRequest,
    CombinedResponse,
    ErrorBody,
    TextGenerationRequest,
    TextGenerationResponse,
)
from textvoice.common.templates import load_templates
from textvoice.services.audio_generation import AudioGenerationService
from textvoice.services.combined import CombinedService
from textvoice.services.text_generation import TextGenerationService

LOGGER = logging.getLogger("textvoice.app")
setup_logging()

_ERROR_RESPONSES = {
    400: {"model": ErrorBody},
    500: {"model": ErrorBody},
}


def build_text_service(settings: Settings | None = None) -> TextGenerationService:
    settings = settings or get_settings()
    client = GeminiClient(
        settings.gemini_api_key,
        base_url=settings.gemini_base_url,
        timeout=settings.http_timeout,
    )
    return TextGenerationService(client)


def build_combined_service(settings: Settings | None = None) -> CombinedService:
    """Construct the default service graph from environment settings."""
    settings = settings or get_settings()
    text_service = build_text_service(settings)
    client = ElevenLabsClient(
        settings.elevenlabs_api_key,
        base_url=settings.elevenlabs_base_url,
        timeout=settings.http_timeout,
    )
    return CombinedService(text_service, AudioGenerationService(client))


def get_combined_service_factory() -> Callable[[], CombinedService]:
    return build_combined_service


def get_text_service_factory() -> Callable[[], TextGenerationService]:
    return build_text_service


app = FastAPI(title="textvoice")


@app.on_event("startup")
def _load_extra_templates() -> None:
    """Register templates from PROMPT_TEMPLATES_FILE when configured."""
    path = get_settings().prompt_templates_file
    if not path:
        return
    try:
        load_templates(path)
    except (OSError, ValueError, KeyError) as e:
        LOGGER.warning("Failed to load prompt templates from %s: %s", path, e)


@app.exception_handler(ApiError)
async def _api_error_handler(request: Request, exc: ApiError) -> JSONResponse:
    status, body = handle_api_error(exc)
    return JSONResponse(jsonable_encoder(body), status_code=status)


@app.exception_handler(RequestValidationError)
async def _validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    error = InvalidRequestError(ErrorCode.INVALID_REQUEST, "Invalid request body", exc.errors())
    return JSONResponse(jsonable_encoder(error.to_dict()), status_code=error.status_code)


@app.exception_handler(Exception)
async def _unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    LOGGER.exception("Unhandled error on %s", request.url.path)
    status, body = handle_api_error(exc)
    return JSONResponse(jsonable_encoder(body), status_code=status)


@app.get("/health")
def health() -> dict[str, Any]:
    settings = get_settings()
    return {
        "status": "ok",
        "services": {
            "gemini": bool(settings.gemini_api_key),
            "elevenlabs": bool(settings.elevenlabs_api_key),
        },
    }


@app.post(
    "/api/call-api",
    response_model=CombinedResponse,
    response_model_exclude_none=True,
    responses=_ERROR_RESPONSES,
)
async def call_api(
    body: CombinedRequest,
    service_factory: Callable[[], CombinedService] = Depends(get_combined_service_factory),
) -> CombinedResponse:
    if not body.prompt:
        raise InvalidRequestError(ErrorCode.PROMPT_REQUIRED, "Prompt is required")

    service = service_factory()
    result = await service.generate_text_with_audio(body)
    LOGGER.info(
        "call-api done: audio=%s audio_error=%s",
        result.audio is not None,
        result.audio_error is not None,
    )
    return result


@app.post(
    "/api/text",
    response_model=TextGenerationResponse,
    response_model_exclude_none=True,
    responses=_ERROR_RESPONSES,
)
async def generate_text(
    body: TextGenerationRequest,
    service_factory: Callable[[], TextGenerationService] = Depends(get_text_service_factory),
) -> TextGenerationResponse:
    if not body.prompt:
        raise InvalidRequestError(ErrorCode.PROMPT_REQUIRED, "Prompt is required")
    return await service_factory().generate_text(body)
