"""
textvoice package.

Provides:
- Gemini text generation and ElevenLabs speech synthesis clients (httpx)
- A combined text + optional audio generation flow
- FastAPI app exposing the combined flow
"""
