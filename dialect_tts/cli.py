from __future__ import annotations

import argparse
import asyncio
import sys
from pathlib import Path

from .config import settings
from .container import get_speech_service, get_voice_repository
from .logging_utils import get_logger
from .models import Dialect, Pitch, VoiceMode
from .studio import (
    HttpSpeechBackend,
    LocalSpeechBackend,
    SpeechBackend,
    Studio,
    play_wav,
    save_audio,
)


logger = get_logger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="dialect-tts",
        description="Dialect-aware Arabic text-to-speech via Gemini",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    serve = sub.add_parser("serve", help="Run the HTTP gateway")
    serve.add_argument("--host", default=settings.host)
    serve.add_argument("--port", type=int, default=settings.port)

    speak = sub.add_parser("speak", help="Generate a WAV file from text")
    speak.add_argument("--text", required=True, help="Text to synthesize")
    speak.add_argument("--out", default=None, help="Output WAV path")
    speak.add_argument("--voice", default="Kore", help="Prebuilt voice name")
    speak.add_argument(
        "--dialect",
        default=Dialect.MSA.value,
        help="Dialect name or label, e.g. egyptian",
    )
    speak.add_argument(
        "--mode",
        default=VoiceMode.PROFESSIONAL.value,
        help="Delivery style, e.g. cheerful",
    )
    speak.add_argument("--speed", type=float, default=1.0, help="Rate multiplier [0.5, 2.0]")
    speak.add_argument(
        "--pitch",
        default=Pitch.NORMAL.value,
        choices=[p.value for p in Pitch],
    )
    speak.add_argument(
        "--emotion-intensity",
        type=int,
        default=50,
        help="Emotion strength [0, 100]",
    )
    speak.add_argument("--api-key", default=None, help="Overrides API_KEY")
    speak.add_argument(
        "--server",
        default=None,
        help="Gateway base URL; when omitted the model is called directly",
    )
    speak.add_argument("--play", action="store_true", help="Play the result")

    sub.add_parser("voices", help="List voices, dialects and modes")
    return parser


def _run_serve(args: argparse.Namespace) -> int:
    import uvicorn

    uvicorn.run(
        "dialect_tts.main:app",
        host=args.host,
        port=args.port,
        log_level="info",
    )
    return 0


def _run_speak(args: argparse.Namespace) -> int:
    backend: SpeechBackend
    if args.server:
        backend = HttpSpeechBackend(args.server)
    else:
        backend = LocalSpeechBackend(get_speech_service())

    studio = Studio(
        backend=backend,
        text=args.text,
        dialect=args.dialect,
        voice=args.voice,
        mode=args.mode,
        speed=args.speed,
        pitch=args.pitch,
        emotion_intensity=args.emotion_intensity,
        api_key=args.api_key,
    )
    result = asyncio.run(studio.generate())
    if result is None:
        print(studio.notice or "Nothing to generate.", file=sys.stderr)
        return 1

    out_path = Path(args.out or result.filename)
    save_audio(result, out_path)
    logger.info("Wrote %s (%d bytes, %s)", out_path, len(result.data), result.media_type)
    if args.play:
        play_wav(result.data)
    return 0


def _run_voices() -> int:
    repo = get_voice_repository()
    print("Voices:")
    for voice in repo.list_voices():
        print(f"  {voice.id:<8} {voice.gender:<7} {voice.description}")
    print("Dialects:")
    for dialect in repo.list_dialects():
        print(f"  {dialect}")
    print("Modes:")
    for mode in repo.list_modes():
        print(f"  {mode}")
    return 0


def main(argv: list[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)
    if args.command == "serve":
        return _run_serve(args)
    if args.command == "speak":
        return _run_speak(args)
    return _run_voices()


if __name__ == "__main__":
    raise SystemExit(main())
