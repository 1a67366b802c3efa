from __future__ import annotations

import base64
import io
import struct
import wave

import pytest

from dialect_tts.audio import (
    WAV_HEADER_SIZE,
    decode_audio_payload,
    decode_base64,
    frame_wav,
    sample_rate_from_mime,
    wav_sample_rate,
)
from dialect_tts.errors import DecodeError


@pytest.mark.parametrize("length", [0, 2, 8, 4800])
def test_frame_wav_layout_and_sizes(length: int) -> None:
    pcm = bytes(i % 256 for i in range(length))

    out = frame_wav(pcm, 24000)

    assert len(out) == length + WAV_HEADER_SIZE
    assert out[0:4] == b"RIFF"
    assert struct.unpack_from("<I", out, 4)[0] == 36 + length
    assert out[8:12] == b"WAVE"
    assert out[12:16] == b"fmt "
    assert out[36:40] == b"data"
    assert struct.unpack_from("<I", out, 40)[0] == length
    assert out[44:] == pcm


def test_frame_wav_fmt_chunk_fields() -> None:
    out = frame_wav(b"\x00\x00" * 10, 16000)

    subchunk_size, fmt_code, channels, rate, byte_rate, block_align, bits = (
        struct.unpack_from("<IHHIIHH", out, 16)
    )
    assert subchunk_size == 16
    assert fmt_code == 1
    assert channels == 1
    assert rate == 16000
    assert byte_rate == 32000
    assert block_align == 2
    assert bits == 16


def test_frame_wav_is_readable_by_wave_module() -> None:
    pcm = b"\x10\x00\xf0\xff" * 100

    with wave.open(io.BytesIO(frame_wav(pcm, 24000)), "rb") as wf:
        assert wf.getnchannels() == 1
        assert wf.getsampwidth() == 2
        assert wf.getframerate() == 24000
        assert wf.readframes(wf.getnframes()) == pcm


def test_decode_base64_matches_standard_encoder() -> None:
    raw = bytes(range(256))
    assert decode_base64(base64.b64encode(raw).decode("ascii")) == raw


@pytest.mark.parametrize("bad", ["AQID*AUG", "AQIDBAUGBwg", "AQ==ID", "صوت"])
def test_decode_base64_rejects_malformed_input(bad: str) -> None:
    with pytest.raises(DecodeError):
        decode_base64(bad)


def test_decode_audio_payload_passes_bytes_through() -> None:
    assert decode_audio_payload(b"\x01\x02") == b"\x01\x02"
    assert decode_audio_payload("AQI=") == b"\x01\x02"


@pytest.mark.parametrize(
    "mime,expected",
    [
        ("audio/L16;codec=pcm;rate=24000", 24000),
        ("audio/L16; rate=16000", 16000),
        ("audio/L16;codec=pcm", 24000),
        ("audio/L16;rate=abc", 24000),
        (None, 24000),
        ("audio/L16;rate=0", 24000),
        ("audio/L16;rate=3000000000", 24000),
    ],
)
def test_sample_rate_from_mime(mime: str | None, expected: int) -> None:
    assert sample_rate_from_mime(mime) == expected


def test_wav_sample_rate_reads_header() -> None:
    assert wav_sample_rate(frame_wav(b"\x00\x00", 22050)) == 22050
    assert wav_sample_rate(b"not a wav") == 24000
