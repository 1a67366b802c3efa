from .speech_service import SpeechService, SynthesisClientFactory
from .synthesis_client import RemoteSynthesisClient

__all__ = [
    "RemoteSynthesisClient",
    "SpeechService",
    "SynthesisClientFactory",
]
