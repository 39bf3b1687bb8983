"""
Centralized error handling for PokeSnipe.

Business outcomes (rejected listings, cards not found) are returned as typed
results by the orchestrator and never raised. The exceptions here cover the
failures underneath: bad configuration, catalog transport errors, storage
problems.
"""

import logging
from typing import Any, Callable, Dict, Optional
from dataclasses import dataclass


class PokeSnipeError(Exception):
    """Base exception class for all PokeSnipe errors."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class ConfigurationError(PokeSnipeError):
    """Raised when settings or credentials are missing or invalid."""
    pass


class NetworkError(PokeSnipeError):
    """Raised when a request cannot reach its service."""
    pass


class CatalogError(PokeSnipeError):
    """Raised when the card catalog answers with an unusable response."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None, status: Optional[int] = None):
        super().__init__(message, details)
        self.status = status


class PricingError(PokeSnipeError):
    """Raised when pricing or currency data cannot be processed."""
    pass


class DealStoreError(PokeSnipeError):
    """Raised when a deal would overwrite a different stored deal."""
    pass


@dataclass
class ErrorContext:
    """Context information for error reporting."""
    operation: str
    module: str
    function: str
    input_data: Optional[Dict[str, Any]] = None
    timestamp: Optional[str] = None


def handle_error(
    error: Exception,
    context: ErrorContext,
    logger: Any,
    reraise: bool = True,
    default_return: Any = None
) -> Any:
    """
    Log an error with its context, then re-raise it or return a fallback.

    Args:
        error: The exception that occurred
        context: Where the error occurred
        logger: stdlib or structlog logger
        reraise: Whether to re-raise the exception after logging
        default_return: Value to return if not re-raising

    Returns:
        The default_return value if not re-raising
    """
    error_msg = f"Error in {context.module}.{context.function} during {context.operation}"

    if isinstance(error, PokeSnipeError):
        error_msg += f": {error.message}"
        if error.details:
            error_msg += f" | Details: {error.details}"
    else:
        error_msg += f": {str(error)}"

    if isinstance(logger, logging.Logger):
        logger.error(
            error_msg,
            extra={
                "error_type": type(error).__name__,
                "operation": context.operation,
                "error_module": context.module,
                "error_function": context.function,
                "input_data": context.input_data,
                "timestamp": context.timestamp,
            },
            exc_info=True,
        )
    else:
        logger.error(
            error_msg,
            error_type=type(error).__name__,
            operation=context.operation,
            error_module=context.module,
            error_function=context.function,
            input_data=context.input_data,
            exc_info=True,
        )

    if reraise:
        raise error

    return default_return


def safe_execute(
    func: Callable,
    *args,
    context: ErrorContext,
    logger: Any,
    default_return: Any = None,
    **kwargs
) -> Any:
    """Run `func`, logging and swallowing any exception into `default_return`."""
    try:
        return func(*args, **kwargs)
    except Exception as e:
        return handle_error(e, context, logger, reraise=False, default_return=default_return)

