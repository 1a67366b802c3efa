from __future__ import annotations

import time
from functools import lru_cache

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from dialect_tts import __version__
from dialect_tts.api import router as api_router
from dialect_tts.config import settings
from dialect_tts.container import get_speech_service, get_voice_repository
from dialect_tts.errors import DialectTTSError, MethodNotAllowedError
from dialect_tts.logging_utils import get_logger


logger = get_logger(__name__)


def create_app() -> FastAPI:
    app = FastAPI(title="dialect-tts-gateway", version=__version__)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allow_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def log_http_requests(request: Request, call_next):
        """Centralized logging for all HTTP requests."""
        start = time.monotonic()
        response = None
        try:
            response = await call_next(request)
            return response
        finally:
            duration = time.monotonic() - start
            client_host = request.client.host if request.client else "unknown"
            status_code = response.status_code if response is not None else 500
            logger.info(
                "HTTP %s %s from %s -> %d in %.3fs",
                request.method,
                request.url.path,
                client_host,
                status_code,
                duration,
            )

    @app.exception_handler(DialectTTSError)
    async def handle_dialect_tts_error(
        request: Request, exc: DialectTTSError
    ) -> JSONResponse:
        headers = None
        if isinstance(exc, MethodNotAllowedError):
            headers = {"Allow": "POST"}

        if exc.status_code >= 500:
            logger.error(
                "Request %s %s failed: %s",
                request.method,
                request.url.path,
                exc,
                exc_info=exc,
            )
            message = f"internal error: {exc.message}"
        else:
            logger.warning(
                "Request %s %s rejected (%d): %s",
                request.method,
                request.url.path,
                exc.status_code,
                exc,
            )
            message = exc.message

        return JSONResponse(
            status_code=exc.status_code,
            content={"error": message},
            headers=headers,
        )

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
        logger.error(
            "Unhandled error for %s %s",
            request.method,
            request.url.path,
            exc_info=exc,
        )
        return JSONResponse(status_code=500, content={"error": "internal error"})

    app.include_router(api_router)

    @app.on_event("startup")
    async def on_startup() -> None:
        # Force-init singletons so that failures surface at startup.
        get_voice_repository()
        get_speech_service()
        logger.info(
            "Speech service ready (rewrite_model=%s, tts_model=%s, "
            "default_credential=%s, timeout=%.1fs)",
            settings.rewrite_model,
            settings.tts_model,
            "configured" if settings.default_api_key else "missing",
            settings.remote_timeout_seconds,
        )

    return app


@lru_cache(maxsize=1)
def get_app() -> FastAPI:
    return create_app()


app = get_app()
