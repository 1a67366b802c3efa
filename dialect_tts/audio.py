from __future__ import annotations

import base64
import binascii
import struct
from typing import Union

from dialect_tts.errors import DecodeError


WAV_HEADER_SIZE = 44
DEFAULT_SAMPLE_RATE_HZ = 24000

_NUM_CHANNELS = 1
_BITS_PER_SAMPLE = 16
_MAX_UINT32 = 0xFFFFFFFF


def wav_header(data_length: int, sample_rate: int) -> bytes:
    """Build the 44-byte RIFF/WAVE header for 16-bit mono PCM."""
    block_align = _NUM_CHANNELS * _BITS_PER_SAMPLE // 8
    byte_rate = sample_rate * block_align
    return struct.pack(
        '<4sI4s4sIHHIIHH4sI',
        b'RIFF',
        36 + data_length,
        b'WAVE',
        b'fmt ',
        16,  # Subchunk1Size for PCM
        1,   # AudioFormat PCM
        _NUM_CHANNELS,
        sample_rate,
        byte_rate,
        block_align,
        _BITS_PER_SAMPLE,
        b'data',
        data_length,
    )


def frame_wav(pcm: bytes, sample_rate: int) -> bytes:
    """Wrap raw 16-bit mono PCM into a WAV container.

    ``pcm`` is copied verbatim after the header; odd lengths and
    non-positive rates are the caller's problem.
    """
    return wav_header(len(pcm), sample_rate) + bytes(pcm)


def decode_base64(text: str) -> bytes:
    """Decode standard base64, rejecting foreign characters and bad padding."""
    try:
        return base64.b64decode(text, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise DecodeError(f"invalid base64 audio payload: {exc}") from exc


def decode_audio_payload(data: Union[str, bytes]) -> bytes:
    """Turn a model audio payload into raw PCM bytes.

    The REST wire format carries base64 text, while the SDK hands back
    ``bytes`` that were already decoded from that transport encoding.
    """
    if isinstance(data, str):
        return decode_base64(data)
    return bytes(data)


def sample_rate_from_mime(
    mime_type: str | None,
    default: int = DEFAULT_SAMPLE_RATE_HZ,
) -> int:
    """Extract ``rate=`` from e.g. ``audio/L16;codec=pcm;rate=24000``."""
    if not mime_type:
        return default
    for param in mime_type.split(";")[1:]:
        key, _, value = param.partition("=")
        if key.strip().lower() == "rate":
            try:
                rate = int(value.strip())
            except ValueError:
                return default
            # byte_rate (rate * 2) must fit the 32-bit header field.
            if rate <= 0 or rate * 2 > _MAX_UINT32:
                return default
            return rate
    return default


def wav_sample_rate(data: bytes, default: int = DEFAULT_SAMPLE_RATE_HZ) -> int:
    """Read the sample rate field back out of a framed WAV file."""
    if len(data) < WAV_HEADER_SIZE or data[:4] != b'RIFF':
        return default
    (rate,) = struct.unpack_from('<I', data, 24)
    return rate
