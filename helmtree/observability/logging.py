"""Structured logging configuration using structlog.

Logs always go to stderr; stdout is reserved for the rendered tree.
``console`` output is meant for a person running ``helm tree -v 2``,
``json`` for collecting plugin logs.
"""

from __future__ import annotations

import logging
import sys

import structlog


def _renderer(fmt: str) -> structlog.types.Processor:
    if fmt == "json":
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(colors=False)


def setup_logging(level: str = "warning", fmt: str = "console") -> None:
    """Configure structlog for *fmt* (``console`` or ``json``) output to stderr."""
    log_level = getattr(logging, level.upper(), logging.WARNING)

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.StackInfoRenderer(),
            structlog.dev.set_exc_info,
            structlog.processors.TimeStamper(fmt="iso", utc=True, key="ts"),
            _renderer(fmt),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=False,
    )


def verbosity_to_level(verbosity: int) -> str:
    """Map a klog-style ``-v`` number to a log level name."""
    if verbosity >= 2:
        return "debug"
    if verbosity == 1:
        return "info"
    return "warning"


def get_logger(component: str) -> structlog.stdlib.BoundLogger:
    """Get a logger bound with a component name."""
    return structlog.get_logger(component=component)  # type: ignore[return-value]
