from .voices import STUDIO_MODES, VOICE_OPTIONS, VoiceRepository

__all__ = [
    "STUDIO_MODES",
    "VOICE_OPTIONS",
    "VoiceRepository",
]
