"""
Structured logging configuration using structlog.

Provides JSON-formatted logs for production and pretty console
logs for development. The parser engine logs through standard library
loggers (per-dimension extractions, and rule attempts when
PARSER_TRACE_RULES is on), which are routed through the same stderr
handler so `text-to-calendar parse --json` keeps stdout clean.
"""

import logging
import sys

import structlog
from structlog.types import Processor

from src.config.settings import Settings, get_settings


def setup_logging(settings: Settings | None = None) -> None:
    """
    Configure structured logging for the application.

    In production: JSON-formatted logs (easy to parse in log aggregators)
    In development: Pretty console output with colors

    Usage:
        setup_logging()
        logger = structlog.get_logger()
        logger.info("event_parsed", confidence=0.8, date_rule="iso")
    """
    settings = settings or get_settings()

    # Common processors for all environments
    shared_processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    if settings.is_production:
        processors = shared_processors + [
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]
    else:
        processors = shared_processors + [
            structlog.dev.ConsoleRenderer(colors=True),
        ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    # Log to stderr so command output on stdout stays machine-readable
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=getattr(logging, settings.log_level),
        force=True,
    )


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """
    Get a structured logger.

    Args:
        name: Logger name (defaults to module name)

    Returns:
        Bound logger instance
    """
    return structlog.get_logger(name)
