"""Text generation followed by optional speech synthesis of the result.

The text stage is mandatory and its errors propagate. The audio stage only
runs when requested, and its failures are reported on the response instead
of failing the request.
"""
from __future__ import annotations
import json
import logging

from textvoice.common.errors import ApiError
from textvoice.common.schema import (
    AudioGenerationRequest,
    CombinedRequest,
    CombinedResponse,
    TextGenerationRequest,
)
from textvoice.services.audio_generation import AudioGenerationService
from textvoice.services.text_generation import TextGenerationService

LOGGER = logging.getLogger("textvoice.services.combined")


class CombinedService:
    def __init__(self, text_service: TextGenerationService, audio_service: AudioGenerationService) -> None:
        self.text_service = text_service
        self.audio_service = audio_service

    async def generate_text_with_audio(self, request: CombinedRequest) -> CombinedResponse:
        text_response = await self.text_service.generate_text(
            TextGenerationRequest(prompt=request.prompt or "", model=request.model)
        )
        result = CombinedResponse(text=text_response)

        if not request.generate_audio:
            return result

        overrides = request.audio_settings.model_dump(exclude_none=True) if request.audio_settings else {}
        audio_request = AudioGenerationRequest(
            **{"text": text_response.text, "voice_id": request.voice_id, **overrides}
        )
        try:
            result.audio = await self.audio_service.generate_audio(audio_request)
        except ApiError as e:
            LOGGER.warning("Audio generation failed: code=%s message=%s", e.code, e.message)
            result.audio_error = e.message or "Audio generation failed"
            result.audio_error_details = json.dumps(e.to_dict(), default=str)
        except Exception as e:
            LOGGER.warning("Audio generation failed: %s", e, exc_info=True)
            result.audio_error = str(e) or "Audio generation failed"
        return result

