"""Audio generation service over the ElevenLabs client."""
from __future__ import annotations

from textvoice.clients.elevenlabs import ElevenLabsClient
from textvoice.common.schema import AudioGenerationRequest, AudioGenerationResponse


class AudioGenerationService:
    def __init__(self, client: ElevenLabsClient) -> None:
        self.client = client

    async def generate_audio(self, request: AudioGenerationRequest) -> AudioGenerationResponse:
        # Text preprocessing hooks go here; currently a pass-through.
        return await self.client.generate_audio(request)
