"""Pydantic models for the HTTP surface and the Anthropic Messages API."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


# ── Inbound ─────────────────────────────────────────────────────


class ParseRequest(BaseModel):
    image_base64: str | None = None
    media_type: str | None = None
    book_hint: str | None = None

    @field_validator("book_hint", mode="before")
    @classmethod
    def _hint_as_text(cls, v: Any) -> Any:
        """The hint only biases the prompt; numbers become text, anything else is dropped."""
        if isinstance(v, (int, float)) and not isinstance(v, bool):
            return str(v)
        if not isinstance(v, str):
            return None
        return v


class HealthResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    status: str
    has_key: bool = Field(alias="hasKey")


class ErrorResponse(BaseModel):
    error: str


# ── Upstream ────────────────────────────────────────────────────


class ContentBlockSchema(BaseModel):
    model_config = ConfigDict(extra="allow")

    type: str
    text: str | None = None


class MessageSchema(BaseModel):
    model_config = ConfigDict(extra="allow")

    content: list[ContentBlockSchema]
    stop_reason: str | None = None
