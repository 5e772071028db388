"""
structlog setup shared by the cache, the playground and the CLI.

- configure_logging(): processors, level filter, renderer; binds run_id
- get_logger(): named bound logger
"""

from __future__ import annotations

import logging
import sys
from uuid import uuid4

import structlog
from structlog.contextvars import bind_contextvars, clear_contextvars
from structlog.typing import FilteringBoundLogger


def configure_logging(level: str = "INFO", json: bool = False) -> str:
    """Configure structlog for the process and return a fresh run id."""
    numeric = logging.getLevelName(level.upper())
    if not isinstance(numeric, int):
        numeric = logging.INFO

    renderer: structlog.typing.Processor
    if json:
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(numeric),
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=False,
    )

    run_id = uuid4().hex[:12]
    clear_contextvars()
    bind_contextvars(run_id=run_id)
    return run_id


def get_logger(name: str) -> FilteringBoundLogger:
    if not structlog.is_configured():
        # library use without configure_logging(): warnings and up, never stdout
        return structlog.wrap_logger(  # type: ignore[no-any-return]
            structlog.PrintLogger(sys.stderr),
            wrapper_class=structlog.make_filtering_bound_logger(logging.WARNING),
        ).bind(logger=name)
    return structlog.get_logger().bind(logger=name)  # type: ignore[no-any-return]


__all__ = ["configure_logging", "get_logger"]
