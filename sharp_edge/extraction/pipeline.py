"""Extraction pipeline: prompt, upstream call, sanitize, parse."""

from __future__ import annotations

from typing import Any

import structlog

from sharp_edge.api.anthropic_client import AnthropicClient, assemble_request
from sharp_edge.config import Settings
from sharp_edge.errors import (
    MISSING_INPUT_MESSAGE,
    MISSING_KEY_MESSAGE,
    ConfigurationError,
    ExtractionError,
    InternalError,
    ParseError,
    ValidationError,
)
from sharp_edge.extraction.base import ExtractionTask, RequestEnvelope
from sharp_edge.extraction.parser import extract
from sharp_edge.extraction.sanitize import sanitize

log = structlog.get_logger()

# Enough of a bad reply to diagnose it without flooding the log
_LOGGED_TEXT_LIMIT = 500


class ExtractionPipeline:
    def __init__(self, settings: Settings, client: AnthropicClient) -> None:
        self._settings = settings
        self._client = client

    def check_request(self, envelope: RequestEnvelope) -> None:
        """Configuration first, then input; both before any network activity."""
        if not self._settings.anthropic_api_key:
            raise ConfigurationError(MISSING_KEY_MESSAGE)
        if not envelope.image_base64 or not envelope.media_type:
            raise ValidationError(MISSING_INPUT_MESSAGE)

    async def run(self, task: ExtractionTask, envelope: RequestEnvelope) -> Any:
        """Run one screenshot through the model and return the parsed result.

        Every failure surfaces as exactly one ExtractionError subclass.
        """
        self.check_request(envelope)
        log.info(
            "extraction_started",
            task=task.kind.value,
            media_type=envelope.media_type,
            image_chars=len(envelope.image_base64 or ""),
            book_hint=envelope.book_hint,
        )

        try:
            instruction = task.build_prompt(envelope)
            body = assemble_request(
                self._settings,
                envelope.image_base64 or "",
                envelope.media_type or "",
                instruction,
                task,
            )
            raw_text = await self._client.create_message(body)
            result = extract(sanitize(raw_text), task)
        except ParseError as exc:
            log.error(
                "parse_failed",
                task=task.kind.value,
                error=exc.message,
                text=exc.text[:_LOGGED_TEXT_LIMIT],
            )
            raise
        except ExtractionError:
            raise
        except Exception as exc:
            log.exception("extraction_crashed", task=task.kind.value)
            raise InternalError(str(exc) or type(exc).__name__) from exc

        log.info(
            "extraction_complete",
            task=task.kind.value,
            rows=len(result) if isinstance(result, list) else len(result["odds"]),
        )
        return result
