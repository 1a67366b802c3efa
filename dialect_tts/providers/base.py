from __future__ import annotations

from typing import Optional, Protocol

from dialect_tts.models import RawAudioPayload


class SpeechModelProvider(Protocol):
    """Interface for the hosted generative model used by the relay."""

    id: str

    async def generate_text(self, *, model: str, prompt: str) -> Optional[str]:
        """Return the model's text answer for ``prompt``, if any."""

    async def generate_speech(
        self,
        *,
        model: str,
        prompt: str,
        voice: str,
    ) -> Optional[RawAudioPayload]:
        """Return the first audio part produced for ``prompt``, if any."""
