from __future__ import annotations

import asyncio
from typing import Optional

from dialect_tts.models import RawAudioPayload
from dialect_tts.services import RemoteSynthesisClient, SpeechService


PCM_8_BYTES = b"\x01\x02\x03\x04\x05\x06\x07\x08"
PCM_8_BYTES_B64 = "AQIDBAUGBwg="
PCM_MIME = "audio/L16;codec=pcm;rate=24000"


class StubProvider:
    """In-memory stand-in for the hosted model that records every prompt."""

    id = "stub"

    def __init__(
        self,
        *,
        rewrite: Optional[str] = "REWRITTEN TEXT",
        audio: Optional[RawAudioPayload] = None,
        rewrite_error: Optional[Exception] = None,
        speech_error: Optional[Exception] = None,
        rewrite_delay: float = 0.0,
        speech_delay: float = 0.0,
    ) -> None:
        self.rewrite = rewrite
        self.audio = audio or RawAudioPayload(data=PCM_8_BYTES_B64, mime_type=PCM_MIME)
        self.rewrite_error = rewrite_error
        self.speech_error = speech_error
        self.rewrite_delay = rewrite_delay
        self.speech_delay = speech_delay
        self.text_prompts: list[str] = []
        self.speech_prompts: list[str] = []
        self.voices: list[str] = []

    @property
    def call_count(self) -> int:
        return len(self.text_prompts) + len(self.speech_prompts)

    async def generate_text(self, *, model: str, prompt: str) -> Optional[str]:
        self.text_prompts.append(prompt)
        if self.rewrite_delay:
            await asyncio.sleep(self.rewrite_delay)
        if self.rewrite_error is not None:
            raise self.rewrite_error
        return self.rewrite

    async def generate_speech(
        self, *, model: str, prompt: str, voice: str
    ) -> Optional[RawAudioPayload]:
        self.speech_prompts.append(prompt)
        self.voices.append(voice)
        if self.speech_delay:
            await asyncio.sleep(self.speech_delay)
        if self.speech_error is not None:
            raise self.speech_error
        return self.audio


def make_client(
    provider: StubProvider, *, timeout_seconds: float = 5.0
) -> RemoteSynthesisClient:
    return RemoteSynthesisClient(
        provider,  # type: ignore[arg-type]
        rewrite_model="rewrite-model",
        tts_model="tts-model",
        timeout_seconds=timeout_seconds,
    )


def make_service(
    provider: StubProvider,
    *,
    default_api_key: Optional[str] = "env-key",
    timeout_seconds: float = 5.0,
) -> tuple[SpeechService, list[str]]:
    """Build a SpeechService over ``provider`` and capture the keys it uses."""
    used_keys: list[str] = []

    def factory(api_key: str) -> RemoteSynthesisClient:
        used_keys.append(api_key)
        return make_client(provider, timeout_seconds=timeout_seconds)

    service = SpeechService(
        client_factory=factory,
        default_api_key=default_api_key,
        sample_rate_hz=24000,
        filename="sawtalarab.wav",
    )
    return service, used_keys
