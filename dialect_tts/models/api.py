from __future__ import annotations

from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

from .domain import Dialect, Pitch, SynthesisRequest, VoiceMode


class GenerateSpeechRequest(BaseModel):
    """Request body for ``POST /api/generate``.

    Field names follow the camelCase wire format; snake_case is accepted too.
    Numeric ranges are advisory and are not enforced.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    text: Optional[str] = Field(None, description="Text to speak")
    voice: str = Field("Kore", description="Prebuilt voice name")
    dialect: str = Field(Dialect.MSA.value, description="Target dialect label or name")
    mode: str = Field(VoiceMode.PROFESSIONAL.value, description="Delivery style")
    speed: float = Field(1.0, description="Speech rate multiplier, nominally 0.5-2.0")
    pitch: str = Field(Pitch.NORMAL.value, description="low | normal | high")
    emotion_intensity: int = Field(
        50,
        alias="emotionIntensity",
        description="Emotion strength, nominally 0-100",
    )
    api_key: Optional[str] = Field(
        None, alias="apiKey", description="Overrides the server default credential"
    )

    def to_domain(self) -> SynthesisRequest:
        return SynthesisRequest(
            text=(self.text or "").strip(),
            voice=self.voice,
            dialect=Dialect.resolve_label(self.dialect),
            mode=self.mode,
            speed=self.speed,
            pitch=self.pitch,
            emotion_intensity=self.emotion_intensity,
            api_key=self.api_key or None,
        )


class ErrorResponse(BaseModel):
    error: str


class HealthResponse(BaseModel):
    status: Literal["ok"]


class Voice(BaseModel):
    id: str
    name: str
    gender: str
    description: str


class VoicesResponse(BaseModel):
    voices: List[Voice]
    dialects: List[str]
    modes: List[str]
    default_dialect: str
