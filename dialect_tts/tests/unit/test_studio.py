from __future__ import annotations

import asyncio
from pathlib import Path

import pytest

from dialect_tts.models import GeneratedAudio, SynthesisRequest
from dialect_tts.studio import (
    GENERIC_FAILURE_NOTICE,
    HttpSpeechBackend,
    LocalSpeechBackend,
    Studio,
    StudioStatus,
    save_audio,
)
from dialect_tts.tests.stubs import StubProvider, make_service


class _ControlledBackend:
    """Backend whose calls block until the test releases them."""

    def __init__(self) -> None:
        self.requests: list[SynthesisRequest] = []
        self.release = asyncio.Event()
        self.fail = False

    async def generate(self, req: SynthesisRequest) -> GeneratedAudio:
        self.requests.append(req)
        await self.release.wait()
        if self.fail:
            raise RuntimeError("backend failure")
        return GeneratedAudio(data=b"RIFF-fake", sample_rate_hz=24000, filename="x.wav")


@pytest.mark.asyncio
async def test_generate_moves_idle_to_ready() -> None:
    backend = _ControlledBackend()
    studio = Studio(backend=backend, text="hello", dialect="egyptian")

    task = asyncio.create_task(studio.generate())
    await asyncio.sleep(0)
    assert studio.status is StudioStatus.GENERATING

    backend.release.set()
    result = await task

    assert result is not None
    assert studio.status is StudioStatus.READY
    assert studio.last_result is result
    assert studio.notice is None
    assert backend.requests[0].dialect == "Egyptian Arabic"


@pytest.mark.asyncio
async def test_generate_ignored_while_in_flight() -> None:
    backend = _ControlledBackend()
    studio = Studio(backend=backend, text="hello")

    first = asyncio.create_task(studio.generate())
    await asyncio.sleep(0)
    second = await studio.generate()

    assert second is None
    backend.release.set()
    await first
    assert len(backend.requests) == 1


@pytest.mark.asyncio
async def test_generate_ignores_blank_text() -> None:
    backend = _ControlledBackend()
    studio = Studio(backend=backend, text="   ")

    assert await studio.generate() is None
    assert backend.requests == []
    assert studio.status is StudioStatus.IDLE


@pytest.mark.asyncio
async def test_failure_returns_to_idle_and_keeps_previous_result() -> None:
    backend = _ControlledBackend()
    backend.release.set()
    studio = Studio(backend=backend, text="hello")

    first = await studio.generate()
    assert studio.status is StudioStatus.READY

    backend.fail = True
    assert await studio.generate() is None

    assert studio.status is StudioStatus.IDLE
    assert studio.notice == GENERIC_FAILURE_NOTICE
    assert studio.last_result is first


@pytest.mark.asyncio
async def test_local_backend_runs_pipeline(tmp_path: Path) -> None:
    service, _ = make_service(StubProvider())
    studio = Studio(backend=LocalSpeechBackend(service), text="hello")

    result = await studio.generate()

    assert result is not None
    out = save_audio(result, tmp_path / result.filename)
    assert out.read_bytes()[:4] == b"RIFF"
    assert out.stat().st_size == 52


class _FakeResponse:
    def __init__(self, status_code: int, content: bytes, headers: dict, body=None) -> None:
        self.status_code = status_code
        self.content = content
        self.headers = headers
        self.text = content.decode("latin-1")
        self._body = body

    def json(self):
        if self._body is None:
            raise ValueError("no json")
        return self._body


class _FakeSession:
    def __init__(self, response: _FakeResponse) -> None:
        self.response = response
        self.calls: list[tuple[str, dict]] = []

    def post(self, url: str, json: dict, timeout: float) -> _FakeResponse:
        self.calls.append((url, json))
        return self.response


@pytest.mark.asyncio
async def test_http_backend_posts_camel_case_payload() -> None:
    from dialect_tts.audio import frame_wav

    wav = frame_wav(b"\x00\x00", 16000)
    session = _FakeSession(
        _FakeResponse(
            200,
            wav,
            {
                "content-type": "audio/wav",
                "content-disposition": 'attachment; filename="sawtalarab.wav"',
            },
        )
    )
    backend = HttpSpeechBackend("http://gateway:8080/", session=session)  # type: ignore[arg-type]

    result = await backend.generate(
        SynthesisRequest(text="hi", emotion_intensity=70, api_key="k")
    )

    url, payload = session.calls[0]
    assert url == "http://gateway:8080/api/generate"
    assert payload["emotionIntensity"] == 70
    assert payload["apiKey"] == "k"
    assert result.data == wav
    assert result.sample_rate_hz == 16000
    assert result.filename == "sawtalarab.wav"


@pytest.mark.asyncio
async def test_http_backend_failure_surfaces_as_notice() -> None:
    session = _FakeSession(
        _FakeResponse(401, b'{"error": "no key"}', {}, body={"error": "no key"})
    )
    backend = HttpSpeechBackend("http://gateway:8080", session=session)  # type: ignore[arg-type]
    studio = Studio(backend=backend, text="hello")

    assert await studio.generate() is None
    assert studio.status is StudioStatus.IDLE
    assert studio.notice == GENERIC_FAILURE_NOTICE
