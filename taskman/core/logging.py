"""Structured logging configuration for taskman.

Uses structlog for JSON-formatted, production-ready logging with context management.
"""

import logging
from typing import Optional

import structlog

from taskman.config import config


def configure_logging(level: Optional[str] = None):
    """Configure structured logging with JSON output for production observability."""
    level_value = getattr(logging, (level or config.log_level()).upper(), None)
    if not isinstance(level_value, int):
        level_value = logging.INFO
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level_value),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )
    return structlog.get_logger()


# Global logger instance
logger = configure_logging()


def log_retry(operation_name: str):
    """Build an ``on_retry`` observer that logs each retry as a warning.

    Args:
        operation_name: Label included in every log event

    Returns:
        Observer taking (error, attempt)
    """

    def _observer(error: Exception, attempt: int) -> None:
        logger.warning(
            "retry_attempt",
            operation=operation_name,
            attempt=attempt,
            error_type=type(error).__name__,
            error=str(error),
        )

    return _observer
