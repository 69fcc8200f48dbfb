"""Logging configuration for rendite.

Provides structured logging using structlog with JSON output for production
and plain console output for development.
"""

from __future__ import annotations

import logging
import logging.handlers
import os
import sys
from pathlib import Path
from typing import Any

import structlog

from rendite.core.exceptions import ConfigurationError
from rendite.core.settings import get_settings

# Log file location
LOG_DIR = Path(__file__).parent.parent.parent / "logs"
LOG_FILE = LOG_DIR / "rendite.log"

# Module-level state for lazy initialization
_configured: bool = False
_default_logger: structlog.BoundLogger | None = None


def configure_logging(
    level: str | None = None,
    json_output: bool | None = None,
) -> structlog.BoundLogger:
    """Configure structured logging for the application.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR). Defaults to the
            ``RENDITE_LOG_LEVEL`` setting, or DEBUG in debug mode.
        json_output: If True, output JSON format (for production). Defaults
            to the ``RENDITE_LOG_JSON`` setting.

    Returns:
        Configured logger instance.

    Raises:
        ConfigurationError: If the level name is unknown
    """
    global _configured, _default_logger

    # Skip if already configured (idempotent)
    if _configured:
        return structlog.get_logger()

    settings = get_settings()
    if level is None:
        level = "DEBUG" if settings.debug_mode else settings.log_level
    log_level = level.upper()
    numeric_level = logging.getLevelName(log_level)
    if not isinstance(numeric_level, int):
        raise ConfigurationError(f"Unknown log level: {level}")
    if json_output is None:
        json_output = settings.log_json

    # 1. Configure Standard Library Logging (Handlers)
    handlers: list[logging.Handler] = [
        logging.StreamHandler(sys.stdout),
    ]

    # Only add file handler if not in test mode
    if not os.environ.get("PYTEST_CURRENT_TEST"):
        try:
            LOG_DIR.mkdir(exist_ok=True)
            file_handler = logging.handlers.RotatingFileHandler(
                str(LOG_FILE), maxBytes=5 * 1024 * 1024, backupCount=3, encoding="utf-8"
            )
            handlers.append(file_handler)
        except OSError:
            # Read-only install locations keep console logging only
            pass

    logging.basicConfig(
        format="%(message)s",
        level=numeric_level,
        handlers=handlers,
        force=True,
    )

    # 2. Configure Structlog Processors
    processors: list[Any] = [
        structlog.stdlib.filter_by_level,
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    if json_output:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=False))

    # 3. Configure Structlog to wrap Stdlib
    structlog.configure(
        processors=processors,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    _configured = True
    _default_logger = structlog.get_logger()
    return _default_logger


def get_logger(name: str | None = None) -> structlog.BoundLogger:
    """Get a logger instance, optionally bound to a specific name.

    This function lazily initializes logging on first call.

    Args:
        name: Optional logger name (usually module name).

    Returns:
        Bound logger instance.
    """
    if not _configured:
        configure_logging()

    logger = structlog.get_logger()
    if name:
        return logger.bind(logger_name=name)
    return logger
