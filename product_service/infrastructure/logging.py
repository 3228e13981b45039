"""Structured logging setup."""

import logging
import sys

import structlog

from product_service.infrastructure.config import settings


def configure_logging(log_level: str | None = None, log_format: str | None = None) -> None:
    """Configure structlog on top of the stdlib logging module.

    Args:
        log_level: Override for the configured level (DEBUG, INFO, ...).
        log_format: Override for the renderer ("json" or "console").
    """
    level = (log_level or settings.log_level).upper()
    renderer_name = log_format or settings.log_format

    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(message)s",
        stream=sys.stdout,
        force=True,
    )

    if renderer_name == "console":
        renderer = structlog.dev.ConsoleRenderer(colors=False)
    else:
        renderer = structlog.processors.JSONRenderer()

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.format_exc_info,
            renderer,
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )
