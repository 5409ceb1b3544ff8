"""Verify the Gemini and ElevenLabs API keys with one live call each."""
from __future__ import annotations
import argparse
import asyncio
import base64
import logging
from pathlib import Path

from textvoice.clients.elevenlabs import ElevenLabsClient
from textvoice.clients.gemini import GeminiClient
from textvoice.common.errors import ApiError, ConfigurationError
from textvoice.common.logging_setup import setup_logging
from textvoice.common.schema import AudioGenerationRequest, TextGenerationRequest
from textvoice.common.templates import PromptBuilder

LOGGER = logging.getLogger("textvoice.cli.check_keys")

DEFAULT_GEMINI_PROMPT = 'Say "Hello, API key is valid!" in one sentence.'
DEFAULT_SPEECH_TEXT = (
    "Hello! This is a test of the Eleven Labs text-to-speech API. "
    "If you can hear this, the API key is working correctly."
)


def parse_vars(pairs: list[str]) -> dict[str, str]:
    """Parse NAME=VALUE pairs."""
    out: dict[str, str] = {}
    for pair in pairs:
        name, sep, value = pair.partition("=")
        if not sep or not name:
            raise ValueError(f"Expected NAME=VALUE, got {pair!r}")
        out[name] = value
    return out


async def check_gemini(prompt: str) -> bool:
    try:
        resp = await GeminiClient().generate_text(TextGenerationRequest(prompt=prompt))
    except (ApiError, ConfigurationError) as e:
        LOGGER.error("Gemini key check failed: %r %s", e, e)
        return False
    LOGGER.info("Gemini key is valid (model=%s)", resp.model)
    print(resp.text)
    return True


async def check_elevenlabs(text: str, out: Path | None) -> bool:
    try:
        resp = await ElevenLabsClient().generate_audio(AudioGenerationRequest(text=text))
    except (ApiError, ConfigurationError) as e:
        LOGGER.error("ElevenLabs key check failed: %r %s", e, e)
        return False
    LOGGER.info("ElevenLabs key is valid (voice=%s, %.2f KB)", resp.voice_id, resp.size / 1024)
    if out is not None:
        out.write_bytes(base64.b64decode(resp.audio_data))
        LOGGER.info("Audio saved to %s", out)
    return True


async def run_checks(args: argparse.Namespace, prompt: str) -> bool:
    ok = True
    if args.vendor in ("gemini", "all"):
        ok = await check_gemini(prompt) and ok
    if args.vendor in ("elevenlabs", "all"):
        ok = await check_elevenlabs(args.text or DEFAULT_SPEECH_TEXT, args.out) and ok
    return ok


def main(argv: list[str] | None = None) -> int:
    setup_logging()
    ap = argparse.ArgumentParser(description="Check Gemini / ElevenLabs API keys")
    ap.add_argument("--vendor", choices=["gemini", "elevenlabs", "all"], default="all")
    ap.add_argument("--prompt", help="Prompt for the Gemini check")
    ap.add_argument("--template", help="Prompt template id, e.g. GREETING")
    ap.add_argument("--var", action="append", default=[], help="Template variable NAME=VALUE")
    ap.add_argument("--text", help="Text for the ElevenLabs check")
    ap.add_argument("--out", type=Path, help="Save the generated audio here")
    args = ap.parse_args(argv)

    prompt = args.prompt or DEFAULT_GEMINI_PROMPT
    if args.template:
        try:
            prompt = PromptBuilder(args.template).set_variables(parse_vars(args.var)).build()
        except (KeyError, ValueError) as e:
            ap.error(str(e))

    return 0 if asyncio.run(run_checks(args, prompt)) else 1

if __name__ == "__main__":
    raise SystemExit(main())
