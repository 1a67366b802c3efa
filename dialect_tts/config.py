from __future__ import annotations

import os
from dataclasses import dataclass, field


def _split_csv(value: str) -> list[str]:
    return [item.strip() for item in value.split(",") if item.strip()]


@dataclass
class AppConfig:
    """Application configuration loaded from environment.

    The default credential lives here and is handed to the speech service
    when it is constructed; nothing else reads ``API_KEY`` directly.
    """

    default_api_key: str | None = os.getenv("API_KEY") or None

    rewrite_model: str = os.getenv("REWRITE_MODEL", "gemini-3-flash-preview")
    tts_model: str = os.getenv("TTS_MODEL", "gemini-2.5-flash-preview-tts")

    # Gemini TTS returns 16-bit mono PCM at 24 kHz unless the mime type says otherwise.
    audio_sample_rate_hz: int = int(os.getenv("AUDIO_SAMPLE_RATE_HZ", "24000"))

    # Upper bound for each remote call (rewrite and synthesis separately).
    remote_timeout_seconds: float = float(
        os.getenv("REMOTE_TIMEOUT_SECONDS", "60")
    )

    output_filename: str = os.getenv("OUTPUT_FILENAME", "sawtalarab.wav")

    cors_allow_origins: list[str] = field(
        default_factory=lambda: _split_csv(
            os.getenv(
                "CORS_ALLOW_ORIGINS",
                "http://localhost:5173,http://127.0.0.1:5173",
            )
        )
    )

    host: str = os.getenv("HOST", "0.0.0.0")
    port: int = int(os.getenv("PORT", "8080"))


settings = AppConfig()
