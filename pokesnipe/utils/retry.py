"""
Retry utilities with exponential backoff.

Used for calls to external services whose transient failures should not
surface to callers, such as the exchange-rate lookup.
"""

import asyncio
import functools
import random
import time
from typing import Any, Callable, Optional, Type, Union


def _backoff_delay(attempt: int, base_delay: float, max_delay: float,
                   exponential_base: float, jitter: bool) -> float:
    delay = min(base_delay * (exponential_base ** (attempt - 1)), max_delay)
    if jitter:
        delay *= (0.5 + random.random() * 0.5)
    return delay


def retry(
    max_attempts: int = 3,
    base_delay: float = 1.0,
    max_delay: float = 60.0,
    exponential_base: float = 2.0,
    jitter: bool = True,
    exceptions: Union[Type[Exception], tuple] = Exception,
    logger: Optional[Any] = None
):
    """
    Retry decorator with exponential backoff.

    Works for both plain and coroutine functions. The last exception is
    re-raised once `max_attempts` is exhausted.

    Args:
        max_attempts: Maximum number of attempts
        base_delay: Initial delay between retries in seconds
        max_delay: Maximum delay between retries in seconds
        exponential_base: Base for exponential backoff calculation
        jitter: Whether to add random jitter to delays
        exceptions: Exception types to retry on
        logger: structlog logger for retry logging
    """
    def decorator(func: Callable) -> Callable:
        def _log_retry(attempt: int, delay: float, error: Exception):
            if logger:
                logger.warning(
                    "retrying_call",
                    function=func.__name__,
                    attempt=attempt,
                    max_attempts=max_attempts,
                    delay=round(delay, 2),
                    error=str(error),
                )

        def _log_giving_up(error: Exception):
            if logger:
                logger.error(
                    "retry_exhausted",
                    function=func.__name__,
                    attempts=max_attempts,
                    error=str(error),
                )

        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            for attempt in range(1, max_attempts + 1):
                try:
                    return func(*args, **kwargs)
                except exceptions as e:
                    if attempt == max_attempts:
                        _log_giving_up(e)
                        raise
                    delay = _backoff_delay(attempt, base_delay, max_delay, exponential_base, jitter)
                    _log_retry(attempt, delay, e)
                    time.sleep(delay)

        @functools.wraps(func)
        async def async_wrapper(*args, **kwargs):
            for attempt in range(1, max_attempts + 1):
                try:
                    return await func(*args, **kwargs)
                except exceptions as e:
                    if attempt == max_attempts:
                        _log_giving_up(e)
                        raise
                    delay = _backoff_delay(attempt, base_delay, max_delay, exponential_base, jitter)
                    _log_retry(attempt, delay, e)
                    await asyncio.sleep(delay)

        if asyncio.iscoroutinefunction(func):
            return async_wrapper
        return wrapper

    return decorator


def is_retryable_error(error: Exception) -> bool:
    """Return True when an error looks transient (network, timeout, throttling)."""
    if isinstance(error, (ConnectionError, TimeoutError, asyncio.TimeoutError, OSError)):
        return True

    status = getattr(error, "status", None)
    if status in (429, 500, 502, 503, 504):
        return True

    error_str = str(error).lower()
    retryable_keywords = [
        'timeout', 'connection refused', 'network unreachable',
        'temporary failure', 'service unavailable', 'rate limit',
        'too many requests', 'server error', 'gateway timeout'
    ]
    return any(keyword in error_str for keyword in retryable_keywords)
