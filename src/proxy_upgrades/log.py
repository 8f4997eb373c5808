"""Logging configuration using structlog."""

import logging
import os
import sys
from typing import Any, Optional

import structlog

from .constants import DEFAULT_LOG_LEVEL, LOG_LEVEL_ENV


def configure_logging(level: Optional[str] = None, fmt: str = "console") -> None:
    """
    Configure structured logging for deployment scripts.

    Args:
        level: Log level name (defaults to $PROXY_UPGRADES_LOG_LEVEL, then WARNING)
        fmt: "console" for human-readable output, "json" for one JSON object per line
    """
    if level is None:
        level = os.environ.get(LOG_LEVEL_ENV, DEFAULT_LOG_LEVEL)

    logging.basicConfig(
        format="%(message)s",
        level=getattr(logging, level.upper(), logging.WARNING),
        handlers=[logging.StreamHandler(sys.stderr)],
    )

    processors: list[Any] = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]

    if fmt == "json":
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=False))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: Optional[str] = None) -> structlog.stdlib.BoundLogger:
    """Get a structured logger instance."""
    return structlog.get_logger(name)
