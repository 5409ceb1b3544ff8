"""Async client for the ElevenLabs text-to-speech endpoint.

The reply body is streamed binary audio; it is buffered in memory and
returned base64 encoded.
"""
from __future__ import annotations
import base64
import logging
import time
from typing import Any

import httpx

from textvoice.common.config import (
    DEFAULT_AUDIO_MODEL,
    DEFAULT_OUTPUT_FORMAT,
    DEFAULT_VOICE,
    ELEVENLABS_BASE_URL,
    get_settings,
)
from textvoice.common.errors import ApiError, ConfigurationError, ErrorCode, UpstreamApiError, error_for_status
from textvoice.common.schema import DEFAULT_VOICE_SETTINGS, AudioGenerationRequest, AudioGenerationResponse

LOGGER = logging.getLogger("textvoice.clients.elevenlabs")


class ElevenLabsClient:
    def __init__(
        self,
        api_key: str | None = None,
        *,
        base_url: str | None = None,
        timeout: float | None = None,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        settings = get_settings()
        self.api_key = api_key or settings.elevenlabs_api_key
        if not self.api_key:
            raise ConfigurationError("ELEVENLABS_API_KEY is required")
        self.base_url = (base_url or settings.elevenlabs_base_url or ELEVENLABS_BASE_URL).rstrip("/")
        self.timeout = timeout if timeout is not None else settings.http_timeout
        self._http_client = http_client

    async def generate_audio(self, request: AudioGenerationRequest) -> AudioGenerationResponse:
        voice_id = (request.voice_id or DEFAULT_VOICE).value
        model_id = (request.model_id or DEFAULT_AUDIO_MODEL).value
        output_format = (request.output_format or DEFAULT_OUTPUT_FORMAT).value
        voice_settings = request.voice_settings or DEFAULT_VOICE_SETTINGS

        url = f"{self.base_url}/text-to-speech/{voice_id}"
        headers = {"xi-api-key": self.api_key, "Accept": "audio/mpeg"}
        payload = {
            "text": request.text,
            "model_id": model_id,
            "voice_settings": voice_settings.model_dump(exclude_none=True),
        }

        start = time.time()
        try:
            if self._http_client is not None:
                audio = await self._stream(self._http_client, url, headers, output_format, payload)
            else:
                async with httpx.AsyncClient(timeout=self.timeout) as client:
                    audio = await self._stream(client, url, headers, output_format, payload)
        except ApiError as e:
            LOGGER.error("ElevenLabs request failed: code=%s status=%s", e.code, e.status_code)
            raise
        except Exception as e:
            LOGGER.error("ElevenLabs request failed: %r", e)
            raise UpstreamApiError(
                ErrorCode.ELEVENLABS_API_ERROR,
                str(e) or "Eleven Labs API error",
                500,
                {"type": type(e).__name__, "message": str(e)},
            ) from e

        latency = int((time.time() - start) * 1000)
        LOGGER.info("ElevenLabs voice=%s returned %d bytes in %sms", voice_id, len(audio), latency)
        return AudioGenerationResponse(
            audio_data=base64.b64encode(audio).decode("ascii"),
            format=output_format,
            voice_id=voice_id,
            size=len(audio),
        )

    async def _stream(
        self,
        client: httpx.AsyncClient,
        url: str,
        headers: dict[str, str],
        output_format: str,
        payload: dict[str, Any],
    ) -> bytes:
        buffer = bytearray()
        async with client.stream(
            "POST",
            url,
            headers=headers,
            params={"output_format": output_format},
            json=payload,
        ) as r:
            if not r.is_success:
                await r.aread()
                raise self._create_error(r)
            async for chunk in r.aiter_bytes():
                buffer.extend(chunk)
        return bytes(buffer)

    @staticmethod
    def _create_error(r: httpx.Response) -> ApiError:
        try:
            data: Any = r.json()
        except ValueError:
            data = r.text
        message = None
        if isinstance(data, dict):
            detail = data.get("detail")
            if isinstance(detail, dict):
                message = detail.get("message")
            elif isinstance(detail, str):
                message = detail
        return error_for_status(
            r.status_code,
            "ELEVENLABS",
            message or f"Eleven Labs API error: {r.status_code}",
            data,
        )
