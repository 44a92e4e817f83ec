"""Concrete extraction tasks: single-market odds boards and fair-value tables."""

from __future__ import annotations

from typing import Any

from pydantic import TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from sharp_edge.config import Settings
from sharp_edge.errors import SchemaError
from sharp_edge.extraction.base import ExtractionTask, RequestEnvelope, TaskKind
from sharp_edge.extraction.models import FairValueRow, OddsSnapshot
from sharp_edge.extraction.prompts import build_prompt

_FAIR_VALUE_ROWS = TypeAdapter(list[FairValueRow])


def _schema_error(task: str, exc: PydanticValidationError) -> SchemaError:
    problems = "; ".join(
        f"{'.'.join(str(p) for p in err['loc']) or '<root>'}: {err['msg']}"
        for err in exc.errors()
    )
    return SchemaError(f"Model response does not match {task} schema: {problems}")


class OddsTask(ExtractionTask):
    kind = TaskKind.ODDS

    def build_prompt(self, envelope: RequestEnvelope) -> str:
        return build_prompt(self.kind, envelope.book_hint)

    def max_tokens(self, settings: Settings) -> int:
        return settings.odds_max_tokens

    def validate(self, data: Any) -> dict[str, Any]:
        try:
            snapshot = OddsSnapshot.model_validate(data)
        except PydanticValidationError as exc:
            raise _schema_error("odds", exc) from exc
        return snapshot.model_dump()


class FairValueTask(ExtractionTask):
    kind = TaskKind.FAIR_VALUE

    def build_prompt(self, envelope: RequestEnvelope) -> str:
        return build_prompt(self.kind)

    def max_tokens(self, settings: Settings) -> int:
        return settings.fair_value_max_tokens

    def validate(self, data: Any) -> list[dict[str, Any]]:
        try:
            rows = _FAIR_VALUE_ROWS.validate_python(data)
        except PydanticValidationError as exc:
            raise _schema_error("fair value", exc) from exc
        return [row.model_dump(by_alias=True) for row in rows]


TASKS: dict[TaskKind, ExtractionTask] = {
    TaskKind.ODDS: OddsTask(),
    TaskKind.FAIR_VALUE: FairValueTask(),
}


def get_task(kind: TaskKind) -> ExtractionTask:
    return TASKS[kind]
