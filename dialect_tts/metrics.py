from __future__ import annotations

from prometheus_client import Counter, Histogram

from dialect_tts.logging_utils import get_logger


logger = get_logger(__name__)


TTS_GENERATE_REQUESTS_TOTAL = Counter(
    "tts_generate_requests_total",
    "Total speech generation requests by outcome status.",
    ["status"],
)

TTS_REWRITE_TOTAL = Counter(
    "tts_rewrite_total",
    "Dialect rewrite attempts by outcome (rewritten, skipped, empty, recovered).",
    ["outcome"],
)

TTS_REMOTE_CALL_SECONDS = Histogram(
    "tts_remote_call_seconds",
    "Latency of calls to the hosted model.",
    ["call"],
)

TTS_REMOTE_FAILURES_TOTAL = Counter(
    "tts_remote_failures_total",
    "Total number of failed calls to the hosted model.",
    ["call", "reason"],
)

TTS_AUDIO_BYTES_TOTAL = Counter(
    "tts_audio_bytes_total",
    "Total number of WAV bytes produced.",
)


def record_generate_request(status: str) -> None:
    TTS_GENERATE_REQUESTS_TOTAL.labels(status=status).inc()


def record_rewrite(outcome: str) -> None:
    TTS_REWRITE_TOTAL.labels(outcome=outcome).inc()


def observe_remote_call(call: str, seconds: float) -> None:
    TTS_REMOTE_CALL_SECONDS.labels(call=call).observe(seconds)


def record_remote_failure(call: str, *, reason: str) -> None:
    TTS_REMOTE_FAILURES_TOTAL.labels(call=call, reason=reason).inc()


def record_audio_bytes(num_bytes: int) -> None:
    TTS_AUDIO_BYTES_TOTAL.inc(num_bytes)
