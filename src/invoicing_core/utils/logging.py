"""Logging configuration for invoicing-core.

Modules log through structlog (``logger = structlog.get_logger(__name__)``)
with identifiers as key-value pairs. ``configure_logging()`` routes
everything through the standard library root logger on stdout; JSON output
in production and staging, coloured console output elsewhere.
"""

import logging
import sys
from typing import Any

import structlog

from invoicing_core.config import Settings, settings as default_settings


def get_log_level(config: Settings | None = None) -> str:
    """Get log level from settings."""
    return (config or default_settings).log_level


def setup_stdlib_logging(config: Settings | None = None) -> None:
    """Configure standard library logging."""
    log_level = get_log_level(config)

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    root_logger.handlers = []

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(log_level)
    console_handler.setFormatter(logging.Formatter("%(message)s"))
    root_logger.addHandler(console_handler)


def setup_structlog(config: Settings | None = None) -> None:
    """Configure structlog for structured logging."""
    config = config or default_settings

    processors: list[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]

    if config.is_production:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty()))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def configure_logging(config: Settings | None = None) -> None:
    """Configure all logging for the application."""
    setup_stdlib_logging(config)
    setup_structlog(config)


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a configured logger instance."""
    return structlog.get_logger(name)


def add_context(**kwargs: Any) -> None:
    """Add context variables that will be included in all subsequent log messages."""
    structlog.contextvars.bind_contextvars(**kwargs)


def clear_context() -> None:
    """Clear all context variables."""
    structlog.contextvars.clear_contextvars()
