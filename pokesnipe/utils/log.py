"""Logging configuration using structlog."""

import logging
import sys
import time
from typing import Any, Dict, Optional

import structlog

from .config import settings


def configure_logging(level: Optional[str] = None):
    """Configure structured logging with JSON renderer."""

    log_level = (level or settings.LOG_LEVEL).upper()

    # Standard library logging carries the rendered structlog lines; force
    # replaces any earlier handler so a later call can change the level
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, log_level, logging.INFO),
        force=True,
    )

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.processors.JSONRenderer(),
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )


def get_logger(name: Optional[str] = None) -> structlog.BoundLogger:
    """Get a configured logger instance."""
    if not structlog.is_configured():
        configure_logging()

    return structlog.get_logger(name)


class LoggerMixin:
    """Give a class a `logger` property and timed start/success/error helpers."""

    @property
    def logger(self) -> structlog.BoundLogger:
        if not hasattr(self, "_logger"):
            self._logger = get_logger(self.__class__.__name__)
        return self._logger

    def log_start(self, event: str, **kwargs: Any) -> Dict[str, Any]:
        """Log the start of an operation and return a context for the matching finish call."""
        context = {"event": event, "start_time": time.time(), **kwargs}
        self.logger.debug(f"{event}_started", **_without_event(context))
        return context

    def log_success(self, context: Dict[str, Any], **kwargs: Any):
        if "start_time" in context:
            kwargs["duration_ms"] = int((time.time() - context["start_time"]) * 1000)

        self.logger.info(
            f"{context.get('event', 'operation')}_completed", **_without_event(context), **kwargs
        )

    def log_error(self, context: Dict[str, Any], error: Exception, **kwargs: Any):
        if "start_time" in context:
            kwargs["duration_ms"] = int((time.time() - context["start_time"]) * 1000)

        self.logger.error(
            f"{context.get('event', 'operation')}_failed",
            **_without_event(context),
            error=str(error),
            error_type=type(error).__name__,
            **kwargs,
        )


def _without_event(context: Dict[str, Any]) -> Dict[str, Any]:
    # structlog reserves "event" for the message itself
    return {k: v for k, v in context.items() if k != "event"}
