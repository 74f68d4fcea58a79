"""
dspfilters Structured Logging Module

Logging is built on structlog:
- JSON output for batch runs
- Pretty console output for interactive use
- Contextual logging with bound fields (e.g. the current chain step)
- Performance metrics for filter runs
"""

from __future__ import annotations

import logging
import sys
from typing import Any

import structlog
from structlog.typing import Processor


def setup_logging(
    level: str = "INFO",
    log_format: str = "json",
    service_name: str = "dspfilters",
) -> None:
    """
    Configure structured logging for the application.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_format: Output format - 'json' for batch runs, 'console' for development
        service_name: Service name to include in the startup entry
    """
    numeric_level = getattr(logging, level.upper())

    shared_processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    if log_format == "json":
        processors: list[Processor] = [
            *shared_processors,
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]
    else:
        processors = [
            *shared_processors,
            structlog.dev.ConsoleRenderer(colors=True),
        ]

    # stderr keeps stdout free for filtered output
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=numeric_level,
    )

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(numeric_level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=True,
    )

    logger = get_logger(service_name)
    logger.info(
        "Logging initialized",
        level=level,
        format=log_format,
        service=service_name,
    )


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """
    Get a structured logger instance.

    Args:
        name: Logger name (typically module name)

    Returns:
        Bound logger instance with context support
    """
    return structlog.get_logger(name)


class LogContext:
    """
    Context manager for adding temporary context to logs.

    Usage:
        with LogContext(chain_step=0, filter="median"):
            logger.info("Applying filter")
    """

    def __init__(self, **kwargs: Any) -> None:
        self.context = kwargs

    def __enter__(self) -> "LogContext":
        structlog.contextvars.bind_contextvars(**self.context)
        return self

    def __exit__(self, *args: Any) -> None:
        structlog.contextvars.unbind_contextvars(*self.context.keys())


def log_performance(
    logger: structlog.stdlib.BoundLogger,
    operation: str,
    duration_ms: float,
    **extra: Any,
) -> None:
    """
    Log a performance metric.

    Args:
        logger: Logger instance
        operation: Name of the operation being measured
        duration_ms: Duration in milliseconds
        **extra: Additional context fields
    """
    logger.info(
        "performance_metric",
        operation=operation,
        duration_ms=round(duration_ms, 3),
        **extra,
    )
