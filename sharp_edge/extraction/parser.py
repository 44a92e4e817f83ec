"""Parse sanitized model text into task results."""

from __future__ import annotations

import json
from typing import Any

from sharp_edge.errors import ParseError
from sharp_edge.extraction.base import ExtractionTask


def parse_json(clean_text: str) -> Any:
    try:
        return json.loads(clean_text)
    except json.JSONDecodeError as exc:
        raise ParseError(
            f"Failed to parse model response as JSON: {exc}", text=clean_text
        ) from exc


def extract(clean_text: str, task: ExtractionTask) -> Any:
    """Parse ``clean_text`` and check it against the task's result shape.

    Raises ParseError for invalid JSON and SchemaError (a ParseError) when
    the JSON does not match the expected shape.
    """
    data = parse_json(clean_text)
    try:
        return task.validate(data)
    except ParseError as exc:
        exc.text = clean_text
        raise
