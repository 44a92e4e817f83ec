"""FastAPI application: screenshot parsing endpoints and health check."""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Sequence

import structlog
from fastapi import FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.datastructures import Headers
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.types import ASGIApp, Message, Receive, Scope, Send

from sharp_edge.api.anthropic_client import AnthropicClient
from sharp_edge.api.schemas import ErrorResponse, HealthResponse, ParseRequest
from sharp_edge.config import Settings
from sharp_edge.errors import MISSING_KEY_MESSAGE, ExtractionError
from sharp_edge.extraction.base import RequestEnvelope, TaskKind
from sharp_edge.extraction.pipeline import ExtractionPipeline
from sharp_edge.extraction.tasks import get_task

log = structlog.get_logger()

TOO_LARGE_MESSAGE = "Request entity too large"
INVALID_BODY_MESSAGE = "Request body must be a JSON object"

ERROR_RESPONSES: dict[int | str, dict[str, Any]] = {
    400: {"model": ErrorResponse},
    500: {"model": ErrorResponse},
}


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


def _body_error_message(errors: Sequence[Any]) -> str:
    """Name the fields that failed; a body that is not a JSON object has none."""
    fields = sorted(
        {
            str(err["loc"][1])
            for err in errors
            if len(err["loc"]) > 1 and err["type"] != "json_invalid"
        }
    )
    if not fields:
        return INVALID_BODY_MESSAGE
    return f"Invalid request body: {', '.join(fields)} must be a string"


class RequestSizeLimitMiddleware:
    """Reject uploads larger than the configured cap.

    A declared Content-Length over the cap is refused up front. Bodies
    without one (chunked uploads) are counted as they arrive and the request
    fails with 413 once the running total passes the cap.
    """

    def __init__(self, app: ASGIApp, max_bytes: int) -> None:
        self.app = app
        self._max_bytes = max_bytes

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        path = scope.get("path", "")
        content_length = Headers(scope=scope).get("content-length")
        if content_length and content_length.isdigit() and int(content_length) > self._max_bytes:
            log.warning("request_too_large", path=path, bytes=int(content_length))
            await _error(413, TOO_LARGE_MESSAGE)(scope, receive, send)
            return

        received = 0

        async def limited_receive() -> Message:
            nonlocal received
            message = await receive()
            if message["type"] == "http.request":
                received += len(message.get("body", b""))
                if received > self._max_bytes:
                    log.warning("request_too_large", path=path, bytes=received)
                    raise HTTPException(status_code=413, detail=TOO_LARGE_MESSAGE)
            return message

        await self.app(scope, limited_receive, send)


def create_app(settings: Settings, client: AnthropicClient | None = None) -> FastAPI:
    """Build the app around one settings object and one upstream client."""
    client = client or AnthropicClient(settings)
    pipeline = ExtractionPipeline(settings, client)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        log.info("app_started", has_key=settings.has_key)
        yield
        await client.close()
        log.info("app_stopped")

    app = FastAPI(title="Sharp Edge", version="1.0.0", lifespan=lifespan)
    app.state.settings = settings
    app.state.pipeline = pipeline
    app.add_middleware(RequestSizeLimitMiddleware, max_bytes=settings.max_request_bytes)

    @app.exception_handler(ExtractionError)
    async def handle_extraction_error(request: Request, exc: ExtractionError) -> JSONResponse:
        return _error(exc.status_code, exc.message)

    @app.exception_handler(RequestValidationError)
    async def handle_bad_body(request: Request, exc: RequestValidationError) -> JSONResponse:
        # A missing credential outranks a malformed body
        if not settings.has_key:
            return _error(500, MISSING_KEY_MESSAGE)
        log.info("bad_request_body", path=request.url.path, errors=len(exc.errors()))
        return _error(400, _body_error_message(exc.errors()))

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_error(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        return _error(exc.status_code, str(exc.detail))

    @app.post("/api/parse", responses=ERROR_RESPONSES)
    async def parse_odds(body: ParseRequest):
        envelope = RequestEnvelope(body.image_base64, body.media_type, body.book_hint)
        return await pipeline.run(get_task(TaskKind.ODDS), envelope)

    @app.post("/api/parse-sgp", responses=ERROR_RESPONSES)
    async def parse_fair_value(body: ParseRequest):
        envelope = RequestEnvelope(body.image_base64, body.media_type)
        return await pipeline.run(get_task(TaskKind.FAIR_VALUE), envelope)

    @app.get("/api/health", response_model=HealthResponse)
    async def health() -> dict[str, Any]:
        return {"status": "ok", "hasKey": settings.has_key}

    return app
