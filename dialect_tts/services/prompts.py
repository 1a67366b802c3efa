"""Descriptor tables and prompt templates sent to the hosted model.

User text is embedded verbatim inside double quotes; no escaping is applied.
"""

from __future__ import annotations

from dialect_tts.models import Pitch


def describe_emotion(intensity: float) -> str:
    if intensity < 20:
        return "very neutral"
    if intensity < 50:
        return "calm"
    if intensity < 80:
        return "expressive"
    return "very passionate"


def describe_pitch(pitch: str) -> str:
    parsed = Pitch.parse(pitch)
    if parsed is Pitch.LOW:
        return "deep"
    if parsed is Pitch.HIGH:
        return "sharp"
    return "neutral"


def build_rewrite_prompt(text: str, dialect: str) -> str:
    return (
        f'Rewrite the following text in a very natural "{dialect}" dialect, '
        "keeping its meaning and spirit. Reply with the rewritten text only, "
        f'without any commentary: "{text}"'
    )


def build_synthesis_prompt(
    *,
    text: str,
    dialect: str,
    mode: str,
    pitch: str,
    emotion_intensity: int,
    speed: float,
) -> str:
    return "\n".join(
        [
            f"Speak as a native speaker of {dialect}.",
            f"Style: {mode}.",
            "Voice direction:",
            f"- Pitch: {describe_pitch(pitch)}.",
            f"- Emotion: {describe_emotion(emotion_intensity)}.",
            f"- Speed: {speed}x.",
            f"- Expressiveness: {emotion_intensity}%.",
            "",
            f'Text to read: "{text}"',
        ]
    )
