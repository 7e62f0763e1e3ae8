"""
Logging for Sooner: structlog in front of stdlib logging.

setup_logging() installs one root handler, so structlog loggers (store,
assistant) and plain stdlib loggers (routes, uvicorn) share a renderer:
JSON lines when SOONER_LOG_FORMAT=json, colored console output otherwise.
Per-request fields bound with bind_request_context() appear on every line
logged while that request is handled.

Usage:
    from sooner.logging_config import get_logger, setup_logging

    setup_logging()
    logger = get_logger(__name__)
    logger.info("Saved data file", users=3)
"""

from __future__ import annotations

import logging
import os
import sys
from typing import Any

import structlog

# Loggers that uvicorn configures with handlers of its own
UVICORN_LOGGERS = ("uvicorn", "uvicorn.error", "uvicorn.access")


def _renderer(json_output: bool) -> structlog.types.Processor:
    if json_output:
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer()


def setup_logging(level: str | None = None, json_output: bool | None = None) -> None:
    """
    Route structlog and stdlib records through one stderr handler.

    Args:
        level: Root level name; defaults to $SOONER_LOG_LEVEL or INFO
        json_output: Render JSON; defaults to $SOONER_LOG_FORMAT == "json"
    """
    if level is None:
        level = os.environ.get("SOONER_LOG_LEVEL", "INFO")
    if json_output is None:
        json_output = os.environ.get("SOONER_LOG_FORMAT", "").lower() == "json"

    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    structlog.configure(
        processors=[*shared_processors, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=shared_processors,
            processors=[structlog.stdlib.ProcessorFormatter.remove_processors_meta, _renderer(json_output)],
        )
    )

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(getattr(logging, level.upper(), logging.INFO))

    for name in UVICORN_LOGGERS:
        uv_logger = logging.getLogger(name)
        uv_logger.handlers.clear()
        uv_logger.propagate = True


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)


def bind_request_context(**values: Any) -> None:
    """Replace the per-request logging fields with `values`."""
    structlog.contextvars.clear_contextvars()
    structlog.contextvars.bind_contextvars(**values)


__all__ = ["bind_request_context", "get_logger", "setup_logging"]
