from .api import (
    ErrorResponse,
    GenerateSpeechRequest,
    HealthResponse,
    Voice,
    VoicesResponse,
)
from .domain import (
    Dialect,
    GeneratedAudio,
    Pitch,
    RawAudioPayload,
    RewriteResult,
    SynthesisRequest,
    VoiceMode,
    VoiceOption,
)

__all__ = [
    "ErrorResponse",
    "GenerateSpeechRequest",
    "HealthResponse",
    "Voice",
    "VoicesResponse",
    "Dialect",
    "GeneratedAudio",
    "Pitch",
    "RawAudioPayload",
    "RewriteResult",
    "SynthesisRequest",
    "VoiceMode",
    "VoiceOption",
]
