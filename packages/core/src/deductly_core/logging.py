"""Structured logging configuration using structlog.

The library logs through ``structlog.get_logger()`` and never configures
logging on import. Applications call ``configure_logging()`` once at start
up.
"""

import logging
import sys
from typing import Optional

import structlog
from structlog.types import Processor

from .config import EngineSettings, get_settings


def configure_logging(settings: Optional[EngineSettings] = None) -> None:
    """Configure structlog for the application.

    Development mode: ConsoleRenderer with colors for readability.
    Otherwise: JSONRenderer for structured logging.
    """
    settings = settings or get_settings()

    shared_processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
    ]

    if settings.use_json_logs:
        processors: list[Processor] = [
            *shared_processors,
            structlog.processors.EventRenamer("message"),
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(default=str),
        ]
    else:
        processors = [
            *shared_processors,
            structlog.dev.ConsoleRenderer(colors=True),
        ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, settings.log_level),
    )


def get_logger(name: Optional[str] = None) -> structlog.stdlib.BoundLogger:
    """Get a configured structlog logger."""
    return structlog.get_logger(name)


__all__ = [
    "configure_logging",
    "get_logger",
]
