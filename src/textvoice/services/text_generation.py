"""Text generation service over the Gemini client."""
from __future__ import annotations

from textvoice.clients.gemini import GeminiClient
from textvoice.common.schema import TextGenerationRequest, TextGenerationResponse


class TextGenerationService:
    def __init__(self, client: GeminiClient) -> None:
        self.client = client

    async def generate_text(self, request: TextGenerationRequest) -> TextGenerationResponse:
        # Validation/transformation hooks go here; currently a pass-through.
        return await self.client.generate_text(request)
