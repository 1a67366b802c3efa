from __future__ import annotations

import asyncio
import io
import re
import wave
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Optional, Protocol

import requests

from dialect_tts.audio import wav_sample_rate
from dialect_tts.errors import RemoteCallError
from dialect_tts.logging_utils import get_logger
from dialect_tts.models import (
    Dialect,
    GeneratedAudio,
    Pitch,
    SynthesisRequest,
    VoiceMode,
)
from dialect_tts.services import SpeechService


logger = get_logger(__name__)

GENERIC_FAILURE_NOTICE = (
    "Generation failed, please check your API key or your connection."
)

_FILENAME_RE = re.compile(r'filename="?([^";]+)"?')


class StudioStatus(str, Enum):
    IDLE = "idle"
    GENERATING = "generating"
    READY = "ready"


class SpeechBackend(Protocol):
    async def generate(self, req: SynthesisRequest) -> GeneratedAudio:
        ...


class LocalSpeechBackend(SpeechBackend):
    """Runs the whole pipeline in-process, talking to the model directly."""

    def __init__(self, service: SpeechService) -> None:
        self._service = service

    async def generate(self, req: SynthesisRequest) -> GeneratedAudio:
        return await self._service.generate(req)


class HttpSpeechBackend(SpeechBackend):
    """Calls a running gateway's ``POST /api/generate`` endpoint."""

    def __init__(
        self,
        base_url: str,
        *,
        timeout_seconds: float = 120.0,
        session: Optional[requests.Session] = None,
    ) -> None:
        self._url = base_url.rstrip("/") + "/api/generate"
        self._timeout_seconds = timeout_seconds
        self._session = session or requests.Session()

    async def generate(self, req: SynthesisRequest) -> GeneratedAudio:
        return await asyncio.to_thread(self._post, req)

    def _post(self, req: SynthesisRequest) -> GeneratedAudio:
        payload = {
            "text": req.text,
            "voice": req.voice,
            "dialect": req.dialect,
            "mode": req.mode,
            "speed": req.speed,
            "pitch": req.pitch,
            "emotionIntensity": req.emotion_intensity,
        }
        if req.api_key:
            payload["apiKey"] = req.api_key

        resp = self._session.post(self._url, json=payload, timeout=self._timeout_seconds)
        if resp.status_code != 200:
            try:
                message = resp.json().get("error", resp.text)
            except ValueError:
                message = resp.text
            raise RemoteCallError(f"gateway returned {resp.status_code}: {message}")

        match = _FILENAME_RE.search(resp.headers.get("content-disposition", ""))
        return GeneratedAudio(
            data=resp.content,
            sample_rate_hz=wav_sample_rate(resp.content),
            filename=match.group(1) if match else "speech.wav",
            media_type=resp.headers.get("content-type", "audio/wav"),
        )


@dataclass
class Studio:
    """Operator-facing generation state.

    Status moves IDLE -> GENERATING -> READY on success, or back to IDLE
    with a notice on failure. A generate call made while another is in
    flight is ignored.
    """

    backend: SpeechBackend
    text: str = ""
    dialect: str = Dialect.MSA.value
    voice: str = "Kore"
    mode: str = VoiceMode.PROFESSIONAL.value
    speed: float = 1.0
    pitch: str = Pitch.NORMAL.value
    emotion_intensity: int = 50
    api_key: Optional[str] = None
    status: StudioStatus = field(default=StudioStatus.IDLE)
    last_result: Optional[GeneratedAudio] = None
    notice: Optional[str] = None

    @property
    def is_generating(self) -> bool:
        return self.status is StudioStatus.GENERATING

    def build_request(self) -> SynthesisRequest:
        return SynthesisRequest(
            text=self.text.strip(),
            voice=self.voice,
            dialect=Dialect.resolve_label(self.dialect),
            mode=self.mode,
            speed=self.speed,
            pitch=self.pitch,
            emotion_intensity=self.emotion_intensity,
            api_key=self.api_key,
        )

    async def generate(self) -> Optional[GeneratedAudio]:
        if self.is_generating or not self.text.strip():
            return None

        previous_status = self.status
        self.status = StudioStatus.GENERATING
        self.notice = None
        try:
            result = await self.backend.generate(self.build_request())
        except Exception:  # noqa: BLE001
            logger.exception("Speech generation failed")
            self.status = StudioStatus.IDLE
            self.notice = GENERIC_FAILURE_NOTICE
            return None

        logger.info(
            "Speech ready (%d bytes, previous status=%s)",
            len(result.data),
            previous_status.value,
        )
        self.last_result = result
        self.status = StudioStatus.READY
        return result


def save_audio(result: GeneratedAudio, path: Path) -> Path:
    path.write_bytes(result.data)
    return path


def play_wav(data: bytes) -> None:
    """Play a 16-bit PCM WAV through the default output device.

    Requires the optional ``sounddevice`` dependency (``playback`` extra).
    """
    import sounddevice as sd

    with wave.open(io.BytesIO(data), "rb") as wf:
        sample_rate = wf.getframerate()
        num_channels = wf.getnchannels()
        frames = wf.readframes(wf.getnframes())

    with sd.RawOutputStream(
        samplerate=sample_rate,
        channels=num_channels,
        dtype="int16",
    ) as stream:
        logger.info("Starting audio playback (%d Hz)", sample_rate)
        stream.write(frames)
    logger.info("Audio playback finished")
