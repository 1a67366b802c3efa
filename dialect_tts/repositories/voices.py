from __future__ import annotations

from typing import List, Optional

from dialect_tts.models import Dialect, VoiceMode, VoiceOption


VOICE_OPTIONS: tuple[VoiceOption, ...] = (
    VoiceOption(
        id="Kore",
        name="Kore",
        gender="male",
        description="Deep, clear voice for news content",
    ),
    VoiceOption(
        id="Puck",
        name="Puck",
        gender="male",
        description="Young, lively voice for advertising",
    ),
    VoiceOption(
        id="Charon",
        name="Charon",
        gender="male",
        description="Calm, soothing voice for audiobooks",
    ),
    VoiceOption(
        id="Zephyr",
        name="Zephyr",
        gender="female",
        description="Soft, engaging female voice",
    ),
    VoiceOption(
        id="Fenrir",
        name="Fenrir",
        gender="male",
        description="Strong, impactful voice for epic narration",
    ),
)

# Modes offered in the studio; the remaining VoiceMode members are accepted
# by the API but not advertised.
STUDIO_MODES: tuple[VoiceMode, ...] = (
    VoiceMode.PROFESSIONAL,
    VoiceMode.FRIENDLY,
    VoiceMode.CHEERFUL,
    VoiceMode.SERIOUS,
    VoiceMode.SOFT,
)


class VoiceRepository:
    """Read-only view over the prebuilt voice catalog."""

    def __init__(self, voices: tuple[VoiceOption, ...] = VOICE_OPTIONS) -> None:
        self._voices = voices

    def list_voices(self, gender: Optional[str] = None) -> List[VoiceOption]:
        items = list(self._voices)
        if gender:
            items = [v for v in items if v.gender == gender.lower()]
        return items

    def list_dialects(self) -> List[str]:
        return [d.value for d in Dialect]

    def list_modes(self) -> List[str]:
        return [m.value for m in STUDIO_MODES]
