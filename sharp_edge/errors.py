"""Failure taxonomy for the extraction pipeline.

Each error carries the HTTP status it is reported with and a
human-readable message that becomes the ``{"error": ...}`` body.
"""

from __future__ import annotations

MISSING_KEY_MESSAGE = "ANTHROPIC_API_KEY not configured"
MISSING_INPUT_MESSAGE = "Missing image_base64 or media_type"


class ExtractionError(Exception):
    status_code: int = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ConfigurationError(ExtractionError):
    """No credential for the completion service. Always a server fault."""


class ValidationError(ExtractionError):
    """Client input is missing or malformed."""

    status_code = 400


class UpstreamError(ExtractionError):
    """The completion service answered with a non-success status.

    The upstream status and raw body are forwarded unmodified so callers can
    tell rate limiting (429) from overload (529) from a bad key (401).
    """

    def __init__(self, status_code: int, body: str) -> None:
        super().__init__(f"Anthropic API error: {body}")
        self.status_code = status_code
        self.body = body


class ParseError(ExtractionError):
    """The model reply could not be parsed into the expected shape."""

    def __init__(self, message: str, text: str = "") -> None:
        super().__init__(message)
        self.text = text


class SchemaError(ParseError):
    """The model reply parsed as JSON but does not match the task schema."""


class InternalError(ExtractionError):
    pass
