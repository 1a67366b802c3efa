from __future__ import annotations

from typing import Callable, Optional

from dialect_tts import metrics as app_metrics
from dialect_tts.audio import (
    DEFAULT_SAMPLE_RATE_HZ,
    decode_audio_payload,
    frame_wav,
    sample_rate_from_mime,
)
from dialect_tts.errors import AuthorizationError, ValidationError
from dialect_tts.logging_utils import get_logger
from dialect_tts.models import GeneratedAudio, SynthesisRequest

from .synthesis_client import RemoteSynthesisClient


logger = get_logger(__name__)

SynthesisClientFactory = Callable[[str], RemoteSynthesisClient]


class SpeechService:
    """Turns a synthesis request into a finished WAV file.

    The pipeline is: resolve credential, remote synthesis, base64 decode,
    WAV framing. Nothing is shared between calls, so one instance can
    serve concurrent requests.
    """

    def __init__(
        self,
        *,
        client_factory: SynthesisClientFactory,
        default_api_key: Optional[str] = None,
        sample_rate_hz: int = DEFAULT_SAMPLE_RATE_HZ,
        filename: str = "speech.wav",
    ) -> None:
        self._client_factory = client_factory
        self._default_api_key = default_api_key
        self._sample_rate_hz = sample_rate_hz
        self._filename = filename

    def resolve_credential(self, override: Optional[str]) -> str:
        api_key = override or self._default_api_key
        if not api_key:
            raise AuthorizationError(
                "no API key supplied and no server default configured"
            )
        return api_key

    async def generate(self, req: SynthesisRequest) -> GeneratedAudio:
        if not req.text or not req.text.strip():
            raise ValidationError("text is required")
        api_key = self.resolve_credential(req.api_key)

        client = self._client_factory(api_key)
        payload, rewrite = await client.synthesize_with_rewrite(req)

        pcm = decode_audio_payload(payload.data)
        sample_rate = sample_rate_from_mime(payload.mime_type, self._sample_rate_hz)
        wav = frame_wav(pcm, sample_rate)

        app_metrics.record_audio_bytes(len(wav))
        logger.info(
            "Generated WAV (%d bytes PCM, %d Hz, total=%d bytes)",
            len(pcm),
            sample_rate,
            len(wav),
        )
        return GeneratedAudio(
            data=wav,
            sample_rate_hz=sample_rate,
            filename=self._filename,
            rewrite=rewrite,
        )
