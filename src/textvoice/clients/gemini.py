"""Async client for the Gemini ``generateContent`` REST endpoint.

Request:  POST {base_url}/models/{model}:generateContent?key=...
          {"contents": [{"parts": [{"text": "..."}]}]}
Reply:    candidates[0].content.parts[0].text, optional usageMetadata.
"""
from __future__ import annotations
import logging
import time
from typing import Any

import httpx

from textvoice.common.config import DEFAULT_GEMINI_MODEL, GEMINI_BASE_URL, get_settings
from textvoice.common.errors import (
    ApiError,
    ConfigurationError,
    ErrorCode,
    NoContentError,
    RequestFailedError,
    error_for_status,
)
from textvoice.common.schema import TextGenerationRequest, TextGenerationResponse, TokenUsage

LOGGER = logging.getLogger("textvoice.clients.gemini")


class GeminiClient:
    def __init__(
        self,
        api_key: str | None = None,
        *,
        base_url: str | None = None,
        timeout: float | None = None,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        settings = get_settings()
        self.api_key = api_key or settings.gemini_api_key
        if not self.api_key:
            raise ConfigurationError("GEMINI_API_KEY is required")
        self.base_url = (base_url or settings.gemini_base_url or GEMINI_BASE_URL).rstrip("/")
        self.timeout = timeout if timeout is not None else settings.http_timeout
        self._http_client = http_client

    async def _post(self, url: str, **kwargs: Any) -> httpx.Response:
        if self._http_client is not None:
            return await self._http_client.post(url, **kwargs)
        async with httpx.AsyncClient(timeout=self.timeout) as client:
            return await client.post(url, **kwargs)

    async def generate_text(self, request: TextGenerationRequest) -> TextGenerationResponse:
        model = (request.model or DEFAULT_GEMINI_MODEL).value
        url = f"{self.base_url}/models/{model}:generateContent"
        payload = {"contents": [{"parts": [{"text": request.prompt}]}]}

        start = time.time()
        try:
            r = await self._post(url, params={"key": self.api_key}, json=payload)
            if r.is_success:
                data = r.json()
            else:
                raise self._create_error(r)
        except ApiError as e:
            LOGGER.error("Gemini request failed: code=%s status=%s", e.code, e.status_code)
            raise
        except (httpx.HTTPError, ValueError) as e:
            LOGGER.error("Gemini request failed: %s", e)
            raise RequestFailedError(ErrorCode.GEMINI_REQUEST_FAILED, str(e) or "Unknown error", 500) from e

        latency = int((time.time() - start) * 1000)
        LOGGER.info("Gemini %s replied in %sms", model, latency)
        return self._parse_response(data, model)

    @staticmethod
    def _parse_response(data: dict[str, Any], model: str) -> TextGenerationResponse:
        try:
            text = data["candidates"][0]["content"]["parts"][0]["text"]
        except (KeyError, IndexError, TypeError):
            text = None
        if not text:
            LOGGER.error("Gemini response had no text.")
            raise NoContentError(ErrorCode.GEMINI_NO_RESPONSE, "No text generated in response", 500)

        usage = None
        meta = data.get("usageMetadata") if isinstance(data, dict) else None
        if isinstance(meta, dict) and meta:
            usage = TokenUsage(
                prompt_tokens=meta.get("promptTokenCount") or 0,
                completion_tokens=meta.get("candidatesTokenCount") or 0,
                total_tokens=meta.get("totalTokenCount") or 0,
            )
        return TextGenerationResponse(text=text, model=model, usage=usage, metadata=data)

    @staticmethod
    def _create_error(r: httpx.Response) -> ApiError:
        try:
            data: Any = r.json()
        except ValueError:
            data = r.text
        upstream = data.get("error") if isinstance(data, dict) else None
        message = None
        if isinstance(upstream, dict):
            message = upstream.get("message")
        return error_for_status(
            r.status_code,
            "GEMINI",
            message or f"Gemini API error: {r.status_code}",
            upstream or data,
        )
