"""Pydantic models for request/response types."""
from __future__ import annotations
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from textvoice.common.config import AudioModel, GeminiModel, OutputFormat, Voice


class _CamelModel(BaseModel):
    # Wire names are camelCase; snake_case is accepted on input too.
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        protected_namespaces=(),
    )


class VoiceSettings(BaseModel):
    """ElevenLabs voice tuning. Field names match the vendor API."""

    stability: float = Field(0.5, ge=0.0, le=1.0)
    similarity_boost: float = Field(0.8, ge=0.0, le=1.0)
    style: float | None = Field(None, ge=0.0, le=1.0)
    use_speaker_boost: bool | None = True


DEFAULT_VOICE_SETTINGS = VoiceSettings()


class TextGenerationRequest(_CamelModel):
    prompt: str
    model: GeminiModel | None = None


class TokenUsage(_CamelModel):
    prompt_tokens: int = 0
    completion_tokens: int = 0
    total_tokens: int = 0


class TextGenerationResponse(_CamelModel):
    text: str
    model: str
    usage: TokenUsage | None = None
    metadata: dict[str, Any] | None = None


class AudioGenerationRequest(_CamelModel):
    text: str
    voice_id: Voice | None = None
    model_id: AudioModel | None = None
    output_format: OutputFormat | None = None
    voice_settings: VoiceSettings | None = None


class AudioSettings(_CamelModel):
    """Partial audio request merged over the combined flow's defaults."""

    voice_id: Voice | None = None
    model_id: AudioModel | None = None
    output_format: OutputFormat | None = None
    voice_settings: VoiceSettings | None = None


class AudioGenerationResponse(_CamelModel):
    audio_data: str
    format: str
    voice_id: str
    size: int


class CombinedRequest(_CamelModel):
    # Optional here so a missing prompt maps to PROMPT_REQUIRED, not a validation error.
    prompt: str | None = None
    model: GeminiModel | None = None
    generate_audio: bool = False
    voice_id: Voice | None = None
    audio_settings: AudioSettings | None = None


class CombinedResponse(_CamelModel):
    text: TextGenerationResponse
    audio: AudioGenerationResponse | None = None
    audio_error: str | None = None
    audio_error_details: str | None = None


class ErrorBody(_CamelModel):
    code: str
    message: str
    status_code: int
    details: Any = None
