"""CLI commands for Sharp Edge (parse a local screenshot, health)."""

from __future__ import annotations

import argparse
import asyncio
import base64
import json
import mimetypes
import sys
from pathlib import Path

from sharp_edge.api.anthropic_client import AnthropicClient
from sharp_edge.config import Settings
from sharp_edge.errors import ExtractionError
from sharp_edge.extraction.base import RequestEnvelope, TaskKind
from sharp_edge.extraction.pipeline import ExtractionPipeline
from sharp_edge.extraction.tasks import get_task
from sharp_edge.main import configure_logging


def load_envelope(path: Path, book_hint: str | None = None) -> RequestEnvelope:
    """Read an image file into the same envelope the HTTP endpoints build."""
    media_type, _ = mimetypes.guess_type(path.name)
    data = base64.b64encode(path.read_bytes()).decode("ascii")
    return RequestEnvelope(data, media_type, book_hint)


async def run_parse(path: Path, kind: TaskKind, book_hint: str | None) -> int:
    settings = Settings()
    configure_logging(settings.log_level)

    client = AnthropicClient(settings)
    pipeline = ExtractionPipeline(settings, client)
    try:
        result = await pipeline.run(get_task(kind), load_envelope(path, book_hint))
    except ExtractionError as exc:
        print(json.dumps({"error": exc.message}), file=sys.stderr)
        return 1
    finally:
        await client.close()

    print(json.dumps(result, indent=2))
    return 0


def run_health() -> int:
    settings = Settings()
    print(json.dumps({"status": "ok", "hasKey": settings.has_key}))
    return 0


def cli() -> None:
    parser = argparse.ArgumentParser(prog="sharp-edge-tools", description="Sharp Edge CLI tools")
    sub = parser.add_subparsers(dest="command")

    ps = sub.add_parser("parse", help="Extract odds or fair values from a local screenshot")
    ps.add_argument("image", type=Path, help="Path to a PNG/JPEG/WebP/GIF screenshot")
    ps.add_argument(
        "--task",
        choices=[k.value for k in TaskKind],
        default=TaskKind.ODDS.value,
        help="odds board or fair-value table",
    )
    ps.add_argument("--book-hint", default=None, help="Likely sportsbook (odds task only)")

    sub.add_parser("health", help="Show whether an Anthropic key is configured")

    args = parser.parse_args()

    if args.command == "parse":
        if not args.image.is_file():
            parser.error(f"no such file: {args.image}")
        sys.exit(asyncio.run(run_parse(args.image, TaskKind(args.task), args.book_hint)))
    elif args.command == "health":
        sys.exit(run_health())
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    cli()
