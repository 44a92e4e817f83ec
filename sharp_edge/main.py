"""Entry point for the Sharp Edge service."""

from __future__ import annotations

import logging
import sys

import structlog
import uvicorn

from sharp_edge.config import Settings
from sharp_edge.web.app import create_app


def configure_logging(level: str) -> None:
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer() if sys.stderr.isatty() else structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(
            getattr(logging, level.upper(), logging.INFO)
        ),
    )


def main() -> None:
    settings = Settings()
    configure_logging(settings.log_level)

    log = structlog.get_logger()
    log.info("starting", version="1.0.0", port=settings.port, has_key=settings.has_key)
    if not settings.has_key:
        log.warning("anthropic_key_missing")

    uvicorn.run(create_app(settings), host=settings.host, port=settings.port)


if __name__ == "__main__":
    main()
