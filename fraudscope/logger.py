"""
Structured logging for the service.

structlog is configured once on first import: log level, ISO timestamp,
exception rendering, and either a JSON or a console renderer depending on
``LOG_FORMAT``.  Modules obtain a logger with ``get_logger(__name__)`` and
log events as ``logger.info("job_created", job_id=...)``.
"""

from __future__ import annotations

import logging
import sys
from typing import Any

import structlog

from fraudscope.config import LOG_FORMAT, LOG_LEVEL

_LEVEL_VALUE = getattr(logging, LOG_LEVEL, logging.INFO)


def configure_logging() -> None:
    processors: list[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]
    if LOG_FORMAT == "json":
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty()))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(_LEVEL_VALUE),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=True,
    )


if not structlog.is_configured():
    configure_logging()


def get_logger(name: str) -> structlog.typing.FilteringBoundLogger:
    """Return a structured logger with the module name bound as ``logger``."""
    return structlog.get_logger(name).bind(logger=name)
