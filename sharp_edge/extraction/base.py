"""Base types and ABC for extraction tasks."""

from __future__ import annotations

import abc
from dataclasses import dataclass
from enum import Enum
from typing import Any

from sharp_edge.config import Settings


class TaskKind(str, Enum):
    ODDS = "odds"
    FAIR_VALUE = "fair_value"


@dataclass(frozen=True)
class RequestEnvelope:
    image_base64: str | None
    media_type: str | None
    book_hint: str | None = None


class ExtractionTask(abc.ABC):
    """One kind of screenshot the pipeline knows how to read.

    Each variant supplies its instruction text, output token budget and the
    shape its parsed result must take.
    """

    kind: TaskKind

    @abc.abstractmethod
    def build_prompt(self, envelope: RequestEnvelope) -> str:
        ...

    @abc.abstractmethod
    def max_tokens(self, settings: Settings) -> int:
        ...

    @abc.abstractmethod
    def validate(self, data: Any) -> Any:
        """Check parsed JSON against the task schema and return the JSON-ready result."""
        ...
