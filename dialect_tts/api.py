from __future__ import annotations

import json
from typing import Any, Optional

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import PlainTextResponse, Response
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest
from pydantic import ValidationError as PydanticValidationError

from dialect_tts import metrics as app_metrics
from dialect_tts.container import get_speech_service, get_voice_repository
from dialect_tts.errors import DialectTTSError, MethodNotAllowedError, ValidationError
from dialect_tts.logging_utils import get_logger
from dialect_tts.models import (
    Dialect,
    ErrorResponse,
    GenerateSpeechRequest,
    HealthResponse,
    Voice,
    VoicesResponse,
)
from dialect_tts.repositories import VoiceRepository
from dialect_tts.services import SpeechService


logger = get_logger(__name__)
router = APIRouter()

# Every verb is routed to the generate handler so that non-POST requests get
# the JSON error body instead of the framework's default 405.
_GENERATE_METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]


@router.get("/", response_class=PlainTextResponse)
async def root() -> PlainTextResponse:
    """Simple root endpoint for quick sanity checks."""
    return PlainTextResponse("dialect-tts gateway is up", media_type="text/plain")


@router.get("/healthz", response_model=HealthResponse)
async def healthz() -> HealthResponse:
    return HealthResponse(status="ok")


@router.get("/v1/voices", response_model=VoicesResponse)
async def list_voices(
    gender: Optional[str] = Query(None),
    repo: VoiceRepository = Depends(get_voice_repository),
) -> VoicesResponse:
    return VoicesResponse(
        voices=[
            Voice(id=v.id, name=v.name, gender=v.gender, description=v.description)
            for v in repo.list_voices(gender=gender)
        ],
        dialects=repo.list_dialects(),
        modes=repo.list_modes(),
        default_dialect=Dialect.standard().value,
    )


@router.get("/metrics")
async def metrics() -> PlainTextResponse:
    payload = generate_latest()
    return PlainTextResponse(payload, media_type=CONTENT_TYPE_LATEST)


@router.api_route(
    "/api/generate",
    methods=_GENERATE_METHODS,
    response_class=Response,
    responses={
        200: {"content": {"audio/wav": {}}, "description": "WAV audio file"},
        400: {"model": ErrorResponse},
        401: {"model": ErrorResponse},
        405: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
)
async def generate_speech(
    request: Request,
    service: SpeechService = Depends(get_speech_service),
) -> Response:
    """Rewrite text into a dialect, synthesize it and return a WAV download.

    Validation and credential checks all happen before any remote call.
    """
    try:
        if request.method != "POST":
            raise MethodNotAllowedError("use POST for this endpoint")

        body = await _read_json_object(request)
        try:
            parsed = GenerateSpeechRequest.model_validate(body)
        except PydanticValidationError as exc:
            raise ValidationError(_summarize_validation_error(exc)) from exc

        synthesis_req = parsed.to_domain()
        if not synthesis_req.text:
            raise ValidationError("text is required in the request body")

        audio = await service.generate(synthesis_req)
    except DialectTTSError as exc:
        app_metrics.record_generate_request(str(exc.status_code))
        raise
    except Exception:
        app_metrics.record_generate_request("500")
        raise

    app_metrics.record_generate_request("200")
    return Response(
        content=audio.data,
        media_type=audio.media_type,
        headers={
            "Content-Length": str(len(audio.data)),
            "Content-Disposition": f'attachment; filename="{audio.filename}"',
        },
    )


async def _read_json_object(request: Request) -> dict[str, Any]:
    raw = await request.body()
    if not raw:
        return {}
    try:
        body = json.loads(raw)
    except ValueError as exc:
        raise ValidationError("request body must be valid JSON") from exc
    if not isinstance(body, dict):
        raise ValidationError("request body must be a JSON object")
    return body


def _summarize_validation_error(exc: PydanticValidationError) -> str:
    problems = []
    for err in exc.errors():
        location = ".".join(str(part) for part in err.get("loc", ()))
        problems.append(f"{location}: {err.get('msg')}")
    return "invalid request body: " + "; ".join(problems)
