"""Structured logging configuration for the exam problem solver."""

import logging
import sys
from typing import Optional
from contextvars import ContextVar


# Context variables for request tracing
request_id_var: ContextVar[Optional[str]] = ContextVar('request_id', default=None)
stage_var: ContextVar[Optional[str]] = ContextVar('stage', default=None)


class StructuredFormatter(logging.Formatter):
    """Custom formatter that adds request ID and pipeline stage to log records."""

    def format(self, record: logging.LogRecord) -> str:
        """
        Format log record with structured fields.

        Adds request_id and stage from context if available.
        """
        request_id = request_id_var.get()
        record.request_id = request_id if request_id else "no-request-id"

        if not hasattr(record, 'stage'):
            record.stage = stage_var.get() or "-"

        return super().format(record)


def configure_logging(log_level: str = "INFO") -> None:
    """
    Configure structured logging for the application.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    """
    formatter = StructuredFormatter(
        fmt='%(asctime)s - [%(request_id)s] [%(stage)s] - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(log_level)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    # Set level for third-party loggers to reduce noise
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("google").setLevel(logging.WARNING)


def set_request_id(request_id: str) -> None:
    """Set the request ID in the current context."""
    request_id_var.set(request_id)


def get_request_id() -> Optional[str]:
    """Get the request ID from the current context."""
    return request_id_var.get()


def set_stage(stage: Optional[str]) -> None:
    """
    Set the pipeline stage in the current context.

    Args:
        stage: Stage name (extract, parse, solve) or None to clear
    """
    stage_var.set(stage)
