"""Async client for the Anthropic Messages API (vision requests)."""

from __future__ import annotations

from typing import Any

import httpx
import structlog

from sharp_edge.api.schemas import MessageSchema
from sharp_edge.config import Settings
from sharp_edge.errors import MISSING_KEY_MESSAGE, ConfigurationError, UpstreamError
from sharp_edge.extraction.base import ExtractionTask

log = structlog.get_logger()

MESSAGES_PATH = "/v1/messages"


def assemble_request(
    settings: Settings,
    image_base64: str,
    media_type: str,
    instruction: str,
    task: ExtractionTask,
) -> dict[str, Any]:
    """Build the Messages API body: one user message, image block then text block."""
    if not settings.anthropic_api_key:
        raise ConfigurationError(MISSING_KEY_MESSAGE)

    return {
        "model": settings.anthropic_model,
        "max_tokens": task.max_tokens(settings),
        "messages": [
            {
                "role": "user",
                "content": [
                    {
                        "type": "image",
                        "source": {
                            "type": "base64",
                            "media_type": media_type,
                            "data": image_base64,
                        },
                    },
                    {"type": "text", "text": instruction},
                ],
            }
        ],
    }


def join_text(message: MessageSchema) -> str:
    """Concatenate the text of every content block in order."""
    return "".join(block.text or "" for block in message.content)


class AnthropicClient:
    def __init__(
        self, settings: Settings, transport: httpx.AsyncBaseTransport | None = None
    ) -> None:
        self._settings = settings
        self._client = httpx.AsyncClient(
            base_url=settings.anthropic_base_url,
            timeout=settings.upstream_timeout_seconds,
            follow_redirects=True,
            transport=transport,
        )

    async def close(self) -> None:
        await self._client.aclose()

    # ── Public methods ──────────────────────────────────────────────

    async def create_message(self, body: dict[str, Any]) -> str:
        """POST a Messages request and return the reply's joined text.

        Non-success statuses raise UpstreamError with the upstream status and
        raw body text. Redirects are followed. Callers assemble the body with
        assemble_request, which refuses to build one without a key.
        """
        resp = await self._client.post(
            MESSAGES_PATH, json=body, headers=self._headers()
        )
        if not resp.is_success:
            log.warning(
                "upstream_error",
                status=resp.status_code,
                model=body.get("model"),
            )
            raise UpstreamError(resp.status_code, resp.text)

        message = MessageSchema(**resp.json())
        text = join_text(message)
        log.info(
            "upstream_reply",
            blocks=len(message.content),
            chars=len(text),
            stop_reason=message.stop_reason,
        )
        return text

    # ── Internal ────────────────────────────────────────────────────

    def _headers(self) -> dict[str, str]:
        return {
            "content-type": "application/json",
            "x-api-key": self._settings.anthropic_api_key or "",
            "anthropic-version": self._settings.anthropic_version,
        }
