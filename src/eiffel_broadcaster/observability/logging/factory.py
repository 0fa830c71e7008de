"""Observability – JSON logging configuration."""
from __future__ import annotations

import logging
from typing import Any

import structlog

from eiffel_broadcaster.observability.logging.filters import DEFAULT_SENSITIVE_FIELDS, SensitiveFieldsFilter


def configure_logging(
    level: int = logging.INFO,
    sensitive_fields: frozenset[str] | None = DEFAULT_SENSITIVE_FIELDS,
    handler: logging.Handler | None = None,
) -> logging.Handler:
    """Route stdlib logging through structlog and render every record as JSON.

    The broadcaster's modules log with ``logging.getLogger(__name__)``; this
    only decides how those records are formatted.  Returns the installed
    handler.
    """
    shared_processors: list[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
    ]
    if sensitive_fields:
        shared_processors.append(SensitiveFieldsFilter(sensitive_fields))

    structlog.configure(
        processors=shared_processors + [structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )
    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=shared_processors,
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ],
    )
    handler = handler or logging.StreamHandler()
    handler.setFormatter(formatter)
    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(level)
    return handler


def get_logger(name: str | None = None) -> Any:
    """Return a structlog logger bound to *name*."""
    return structlog.get_logger(name)


__all__ = ["configure_logging", "get_logger"]
