from __future__ import annotations

import pytest

from textvoice.common.config import (
    DEFAULT_AUDIO_MODEL,
    DEFAULT_GEMINI_MODEL,
    DEFAULT_OUTPUT_FORMAT,
    DEFAULT_VOICE,
    GEMINI_BASE_URL,
    get_settings,
)


def test_defaults() -> None:
    assert DEFAULT_GEMINI_MODEL.value == "gemini-2.0-flash-exp"
    assert DEFAULT_VOICE.value == "JBFqnCBsd6RMkjVDRZzb"
    assert DEFAULT_AUDIO_MODEL.value == "eleven_multilingual_v2"
    assert DEFAULT_OUTPUT_FORMAT.value == "mp3_44100_128"


def test_settings_from_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("GEMINI_API_KEY", "g-key")
    monkeypatch.setenv("ELEVENLABS_API_KEY", "e-key")
    monkeypatch.setenv("ELEVENLABS_BASE_URL", "http://localhost:9000/v1/")
    monkeypatch.setenv("TEXTVOICE_HTTP_TIMEOUT", "30")
    monkeypatch.setenv("TEXTVOICE_PORT", "9001")
    monkeypatch.delenv("GEMINI_BASE_URL", raising=False)
    monkeypatch.delenv("PROMPT_TEMPLATES_FILE", raising=False)

    s = get_settings()
    assert s.gemini_api_key == "g-key"
    assert s.elevenlabs_api_key == "e-key"
    assert s.gemini_base_url == GEMINI_BASE_URL
    assert s.elevenlabs_base_url == "http://localhost:9000/v1"
    assert s.http_timeout == 30.0
    assert s.port == 9001
    assert s.prompt_templates_file is None
