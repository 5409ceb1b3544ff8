"""Environment-backed settings and the closed sets of model/voice ids."""
from __future__ import annotations
import os
from dataclasses import dataclass
from enum import Enum

from dotenv import load_dotenv

load_dotenv()


class GeminiModel(str, Enum):
    FLASH_EXP = "gemini-2.0-flash-exp"
    PRO = "gemini-pro"
    PRO_VISION = "gemini-pro-vision"


class Voice(str, Enum):
    """ElevenLabs voice ids."""

    RACHEL = "JBFqnCBsd6RMkjVDRZzb"
    DOMI = "AZnzlk1XvdvUeBnXmlld"
    BELLA = "EXAVITQu4vr4xnSDxMaL"


class AudioModel(str, Enum):
    MULTILINGUAL_V2 = "eleven_multilingual_v2"
    V3 = "eleven_v3"
    TURBO_V2_5 = "eleven_turbo_v2_5"
    FLASH_V2_5 = "eleven_flash_v2_5"


class OutputFormat(str, Enum):
    MP3_22050_32 = "mp3_22050_32"
    MP3_44100_64 = "mp3_44100_64"
    MP3_44100_96 = "mp3_44100_96"
    MP3_44100_128 = "mp3_44100_128"
    MP3_44100_192 = "mp3_44100_192"


DEFAULT_GEMINI_MODEL = GeminiModel.FLASH_EXP
DEFAULT_VOICE = Voice.RACHEL
DEFAULT_AUDIO_MODEL = AudioModel.MULTILINGUAL_V2
DEFAULT_OUTPUT_FORMAT = OutputFormat.MP3_44100_128

GEMINI_BASE_URL = "https://generativelanguage.googleapis.com/v1beta"
ELEVENLABS_BASE_URL = "https://api.elevenlabs.io/v1"


@dataclass(frozen=True)
class Settings:
    gemini_api_key: str
    elevenlabs_api_key: str
    gemini_base_url: str
    elevenlabs_base_url: str
    http_timeout: float
    log_level: str
    prompt_templates_file: str | None
    host: str
    port: int


def get_settings() -> Settings:
    """Read settings from the process environment."""
    return Settings(
        gemini_api_key=os.getenv("GEMINI_API_KEY", ""),
        elevenlabs_api_key=os.getenv("ELEVENLABS_API_KEY") or os.getenv("ELEVEN_LABS_API_KEY", ""),
        gemini_base_url=os.getenv("GEMINI_BASE_URL", GEMINI_BASE_URL).rstrip("/"),
        elevenlabs_base_url=os.getenv("ELEVENLABS_BASE_URL", ELEVENLABS_BASE_URL).rstrip("/"),
        http_timeout=float(os.getenv("TEXTVOICE_HTTP_TIMEOUT", "120")),
        log_level=os.getenv("LOG_LEVEL", "INFO"),
        prompt_templates_file=os.getenv("PROMPT_TEMPLATES_FILE") or None,
        host=os.getenv("TEXTVOICE_HOST", "127.0.0.1"),
        port=int(os.getenv("TEXTVOICE_PORT", "8000")),
    )
