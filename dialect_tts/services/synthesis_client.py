from __future__ import annotations

import asyncio
import time
from typing import Awaitable, TypeVar

from dialect_tts import metrics as app_metrics
from dialect_tts.errors import RemoteCallError, RemoteTimeoutError, SynthesisError
from dialect_tts.logging_utils import get_logger
from dialect_tts.models import (
    Dialect,
    RawAudioPayload,
    RewriteResult,
    SynthesisRequest,
)
from dialect_tts.providers import SpeechModelProvider

from .prompts import build_rewrite_prompt, build_synthesis_prompt


logger = get_logger(__name__)

T = TypeVar("T")


class RemoteSynthesisClient:
    """Runs the rewrite and synthesis calls against the hosted model.

    Both calls are strictly sequential and each one is bounded by
    ``timeout_seconds``. Rewrite failures fall back to the original text;
    synthesis failures propagate as ``RemoteCallError`` subclasses.
    """

    def __init__(
        self,
        provider: SpeechModelProvider,
        *,
        rewrite_model: str,
        tts_model: str,
        timeout_seconds: float = 60.0,
    ) -> None:
        self._provider = provider
        self._rewrite_model = rewrite_model
        self._tts_model = tts_model
        self._timeout_seconds = timeout_seconds

    async def adapt_text(self, text: str, dialect: str) -> RewriteResult:
        """Rewrite ``text`` into ``dialect``; never raises for remote errors."""
        if Dialect.resolve_label(dialect) == Dialect.standard().value:
            app_metrics.record_rewrite("skipped")
            return RewriteResult.unchanged(text)

        prompt = build_rewrite_prompt(text, dialect)
        try:
            answer = await self._call(
                "rewrite",
                self._provider.generate_text(model=self._rewrite_model, prompt=prompt),
            )
        except RemoteCallError as exc:
            logger.warning(
                "Dialect rewrite failed (dialect=%s), keeping original text: %s",
                dialect,
                exc,
            )
            app_metrics.record_rewrite("recovered")
            return RewriteResult.unchanged(text, error=str(exc))

        rewritten = (answer or "").strip()
        if not rewritten:
            logger.info("Dialect rewrite returned no text (dialect=%s)", dialect)
            app_metrics.record_rewrite("empty")
            return RewriteResult.unchanged(text)

        app_metrics.record_rewrite("rewritten")
        return RewriteResult(text=rewritten, rewritten=True)

    async def synthesize(self, req: SynthesisRequest) -> RawAudioPayload:
        payload, _ = await self.synthesize_with_rewrite(req)
        return payload

    async def synthesize_with_rewrite(
        self,
        req: SynthesisRequest,
    ) -> tuple[RawAudioPayload, RewriteResult]:
        """Synthesize speech and report which rewrite branch was taken."""
        rewrite = await self.adapt_text(req.text, req.dialect)

        prompt = build_synthesis_prompt(
            text=rewrite.text,
            dialect=req.dialect,
            mode=req.mode,
            pitch=req.pitch,
            emotion_intensity=req.emotion_intensity,
            speed=req.speed,
        )
        payload = await self._call(
            "synthesize",
            self._provider.generate_speech(
                model=self._tts_model,
                prompt=prompt,
                voice=req.voice,
            ),
        )
        if payload is None or not payload.data:
            app_metrics.record_remote_failure("synthesize", reason="no_audio")
            raise SynthesisError("model returned no audio data")

        logger.info(
            "Synthesized speech (voice=%s, dialect=%s, rewritten=%s)",
            req.voice,
            req.dialect,
            rewrite.rewritten,
        )
        return payload, rewrite

    async def _call(self, call: str, awaitable: Awaitable[T]) -> T:
        """Await one remote call with a timeout, normalizing its failures."""
        start = time.monotonic()
        try:
            return await asyncio.wait_for(awaitable, timeout=self._timeout_seconds)
        except asyncio.TimeoutError as exc:
            app_metrics.record_remote_failure(call, reason="timeout")
            raise RemoteTimeoutError(
                f"{call} call timed out after {self._timeout_seconds:g}s"
            ) from exc
        except RemoteCallError:
            app_metrics.record_remote_failure(call, reason="error")
            raise
        except Exception as exc:  # noqa: BLE001
            app_metrics.record_remote_failure(call, reason="error")
            raise RemoteCallError(f"{call} call failed: {exc}") from exc
        finally:
            app_metrics.observe_remote_call(call, time.monotonic() - start)
