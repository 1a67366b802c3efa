from .base import SpeechModelProvider
from .gemini import GeminiSpeechProvider

__all__ = [
    "SpeechModelProvider",
    "GeminiSpeechProvider",
]
