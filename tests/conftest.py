"""Shared test fixtures."""

from __future__ import annotations

import json
from typing import Any, Callable

import httpx
import pytest
from fastapi.testclient import TestClient

from sharp_edge.api.anthropic_client import AnthropicClient
from sharp_edge.config import Settings
from sharp_edge.web.app import create_app


def message_reply(*texts: str) -> dict[str, Any]:
    """A Messages API success payload with one text block per argument."""
    return {
        "id": "msg_test",
        "type": "message",
        "role": "assistant",
        "model": "claude-sonnet-4-5-20250929",
        "content": [{"type": "text", "text": t} for t in texts],
        "stop_reason": "end_turn",
    }


class FakeUpstream:
    """Records outgoing requests and answers with a canned response."""

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self.status_code = 200
        self.payload: Any = message_reply("{}")

    def reply_text(self, *texts: str) -> None:
        self.status_code = 200
        self.payload = message_reply(*texts)

    def fail(self, status_code: int, body: str) -> None:
        self.status_code = status_code
        self.payload = body

    @property
    def calls(self) -> int:
        return len(self.requests)

    def last_body(self) -> dict[str, Any]:
        return json.loads(self.requests[-1].content)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if isinstance(self.payload, str):
            return httpx.Response(self.status_code, text=self.payload)
        return httpx.Response(self.status_code, json=self.payload)

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)


@pytest.fixture
def settings() -> Settings:
    return Settings(anthropic_api_key="test_key")


@pytest.fixture
def keyless_settings() -> Settings:
    return Settings(anthropic_api_key=None)


@pytest.fixture
def upstream() -> FakeUpstream:
    return FakeUpstream()


@pytest.fixture
def anthropic_client(settings, upstream) -> AnthropicClient:
    return AnthropicClient(settings, transport=upstream.transport())


@pytest.fixture
def make_client(upstream) -> Callable[[Settings], TestClient]:
    def _make(s: Settings) -> TestClient:
        return TestClient(create_app(s, AnthropicClient(s, transport=upstream.transport())))

    return _make


@pytest.fixture
def client(settings, make_client) -> TestClient:
    return make_client(settings)
