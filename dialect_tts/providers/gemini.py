from __future__ import annotations

from typing import Any, Optional

from google import genai
from google.genai import types

from dialect_tts.logging_utils import get_logger
from dialect_tts.models import RawAudioPayload

from .base import SpeechModelProvider


logger = get_logger(__name__)


class GeminiSpeechProvider(SpeechModelProvider):
    """Gemini-backed provider using the async google-genai client.

    One instance is bound to one credential and is meant to live for a
    single request.
    """

    id: str = "gemini"

    def __init__(self, api_key: str, client: Any | None = None) -> None:
        self._client = client or genai.Client(api_key=api_key)

    async def generate_text(self, *, model: str, prompt: str) -> Optional[str]:
        response = await self._client.aio.models.generate_content(
            model=model,
            contents=prompt,
        )
        return response.text

    async def generate_speech(
        self,
        *,
        model: str,
        prompt: str,
        voice: str,
    ) -> Optional[RawAudioPayload]:
        response = await self._client.aio.models.generate_content(
            model=model,
            contents=prompt,
            config=types.GenerateContentConfig(
                response_modalities=["AUDIO"],
                speech_config=types.SpeechConfig(
                    voice_config=types.VoiceConfig(
                        prebuilt_voice_config=types.PrebuiltVoiceConfig(
                            voice_name=voice,
                        )
                    )
                ),
            ),
        )
        return _first_inline_audio(response)


def _first_inline_audio(response: Any) -> Optional[RawAudioPayload]:
    """Pick ``candidates[0].content.parts[0].inline_data`` when present."""
    candidates = getattr(response, "candidates", None) or []
    if not candidates:
        return None
    content = getattr(candidates[0], "content", None)
    parts = getattr(content, "parts", None) or []
    if not parts:
        return None
    inline = getattr(parts[0], "inline_data", None)
    if inline is None or not inline.data:
        return None
    logger.info(
        "Gemini returned inline audio (mime=%s, len=%d)",
        inline.mime_type,
        len(inline.data),
    )
    return RawAudioPayload(data=inline.data, mime_type=inline.mime_type)
