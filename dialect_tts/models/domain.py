from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union


class Dialect(str, Enum):
    """Arabic dialects the rewrite step knows about.

    Values are the labels embedded in prompts sent to the model.
    """

    MSA = "Modern Standard Arabic"
    EGYPTIAN = "Egyptian Arabic"
    GULF = "Gulf Arabic"
    LEVANTINE = "Levantine Arabic"
    MAGHREBI = "Maghrebi Arabic"
    IRAQI = "Iraqi Arabic"

    @classmethod
    def standard(cls) -> "Dialect":
        return cls.MSA

    @classmethod
    def resolve_label(cls, value: str) -> str:
        """Map a member name or label onto its canonical label.

        Unknown values are passed through so callers can experiment with
        dialects outside the catalog.
        """
        cleaned = value.strip()
        if cleaned in _ARABIC_DIALECT_LABELS:
            return _ARABIC_DIALECT_LABELS[cleaned].value
        for member in cls:
            if cleaned.lower() in (member.name.lower(), member.value.lower()):
                return member.value
        return cleaned


class VoiceMode(str, Enum):
    PROFESSIONAL = "professional"
    FRIENDLY = "friendly"
    CHEERFUL = "cheerful"
    SERIOUS = "serious"
    SOFT = "soft"
    DRAMATIC = "dramatic"
    ANGRY = "angry"
    SAD = "sad"


class Pitch(str, Enum):
    LOW = "low"
    NORMAL = "normal"
    HIGH = "high"

    @classmethod
    def parse(cls, value: str) -> Optional["Pitch"]:
        """Accept the English value or the Arabic label used by the web app."""
        cleaned = (value or "").strip()
        if cleaned in _ARABIC_PITCH_LABELS:
            return _ARABIC_PITCH_LABELS[cleaned]
        try:
            return cls(cleaned.lower())
        except ValueError:
            return None


# Arabic labels sent by the studio web client.
_ARABIC_DIALECT_LABELS: dict[str, Dialect] = {
    "اللغة العربية الفصحى": Dialect.MSA,
    "اللهجة المصرية": Dialect.EGYPTIAN,
    "اللهجة الخليجية": Dialect.GULF,
    "اللهجة الشامية": Dialect.LEVANTINE,
    "اللهجة المغربية": Dialect.MAGHREBI,
    "اللهجة العراقية": Dialect.IRAQI,
}

_ARABIC_PITCH_LABELS: dict[str, Pitch] = {
    "منخفض": Pitch.LOW,
    "عادي": Pitch.NORMAL,
    "مرتفع": Pitch.HIGH,
}


@dataclass(frozen=True)
class VoiceOption:
    """A prebuilt voice offered by the hosted TTS model."""

    id: str
    name: str
    gender: str
    description: str


@dataclass
class SynthesisRequest:
    """One synthesis job; lives for a single request/response cycle."""

    text: str
    voice: str = "Kore"
    dialect: str = Dialect.MSA.value
    mode: str = VoiceMode.PROFESSIONAL.value
    speed: float = 1.0
    pitch: str = Pitch.NORMAL.value
    emotion_intensity: int = 50
    api_key: Optional[str] = None


@dataclass(frozen=True)
class RewriteResult:
    """Outcome of the dialect rewrite step.

    ``rewritten`` is False whenever the original text was kept, either
    because no rewrite was needed or because the remote call failed
    (in which case ``error`` describes the failure).
    """

    text: str
    rewritten: bool
    error: Optional[str] = None

    @property
    def recovered(self) -> bool:
        return self.error is not None

    @classmethod
    def unchanged(cls, text: str, error: Optional[str] = None) -> "RewriteResult":
        return cls(text=text, rewritten=False, error=error)


@dataclass(frozen=True)
class RawAudioPayload:
    """Encoded audio exactly as returned by the model."""

    data: Union[str, bytes]
    mime_type: Optional[str] = None


@dataclass(frozen=True)
class GeneratedAudio:
    """A finished WAV file ready to be returned, saved or played."""

    data: bytes
    sample_rate_hz: int
    filename: str
    media_type: str = "audio/wav"
    rewrite: Optional[RewriteResult] = None
