from __future__ import annotations

from functools import lru_cache

from dialect_tts.config import settings
from dialect_tts.providers import GeminiSpeechProvider
from dialect_tts.repositories import VoiceRepository
from dialect_tts.services import RemoteSynthesisClient, SpeechService


def build_gemini_client(api_key: str) -> RemoteSynthesisClient:
    """Build a per-request synthesis client bound to ``api_key``."""
    return RemoteSynthesisClient(
        GeminiSpeechProvider(api_key=api_key),
        rewrite_model=settings.rewrite_model,
        tts_model=settings.tts_model,
        timeout_seconds=settings.remote_timeout_seconds,
    )


@lru_cache(maxsize=1)
def get_voice_repository() -> VoiceRepository:
    return VoiceRepository()


@lru_cache(maxsize=1)
def get_speech_service() -> SpeechService:
    return SpeechService(
        client_factory=build_gemini_client,
        default_api_key=settings.default_api_key,
        sample_rate_hz=settings.audio_sample_rate_hz,
        filename=settings.output_filename,
    )
