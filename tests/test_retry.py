"""
Tests for the retry utilities with exponential backoff.

Delays are asserted through patched sleeps so the suite stays fast.
"""

from unittest.mock import AsyncMock, Mock, patch

import pytest

from pokesnipe.utils.error_handler import CatalogError, NetworkError, PricingError
from pokesnipe.utils.retry import is_retryable_error, retry


class TestRetryDecorator:
    """Test the basic retry decorator functionality."""

    def test_retry_success_on_first_attempt(self):
        """Test that function succeeds on first attempt without retries."""
        @retry(max_attempts=3, base_delay=0.1)
        def test_func():
            return "success"

        with patch("pokesnipe.utils.retry.time.sleep") as mock_sleep:
            assert test_func() == "success"

        mock_sleep.assert_not_called()

    def test_retry_success_after_failures(self):
        """Test that function succeeds after some failures."""
        attempt_count = 0

        @retry(max_attempts=3, base_delay=0.1)
        def test_func():
            nonlocal attempt_count
            attempt_count += 1
            if attempt_count < 3:
                raise ValueError("Temporary failure")
            return "success"

        with patch("pokesnipe.utils.retry.time.sleep"):
            assert test_func() == "success"

        assert attempt_count == 3

    def test_retry_max_attempts_exceeded(self):
        """Test that retry stops after max attempts and re-raises."""
        attempt_count = 0

        @retry(max_attempts=3, base_delay=0.1)
        def test_func():
            nonlocal attempt_count
            attempt_count += 1
            raise ValueError("Persistent failure")

        with patch("pokesnipe.utils.retry.time.sleep"):
            with pytest.raises(ValueError) as exc_info:
                test_func()

        assert str(exc_info.value) == "Persistent failure"
        assert attempt_count == 3

    def test_retry_ignores_unexpected_exceptions(self):
        """Test that retry doesn't catch unexpected exception types."""
        attempt_count = 0

        @retry(max_attempts=3, base_delay=0.1, exceptions=(NetworkError,))
        def test_func():
            nonlocal attempt_count
            attempt_count += 1
            raise TypeError("Type error")

        with pytest.raises(TypeError):
            test_func()

        assert attempt_count == 1

    def test_retry_delay_calculation(self):
        """Test that retry delays follow exponential backoff capped at max_delay."""
        @retry(max_attempts=5, base_delay=1.0, max_delay=3.0, exponential_base=2.0, jitter=False)
        def test_func():
            raise ValueError("Failure")

        with patch("pokesnipe.utils.retry.time.sleep") as mock_sleep:
            with pytest.raises(ValueError):
                test_func()

        assert [c.args[0] for c in mock_sleep.call_args_list] == [1.0, 2.0, 3.0, 3.0]

    def test_retry_with_jitter(self):
        """Test that jitter keeps delays between half and the full backoff."""
        @retry(max_attempts=3, base_delay=1.0, jitter=True)
        def test_func():
            raise ValueError("Failure")

        with patch("pokesnipe.utils.retry.time.sleep") as mock_sleep:
            with pytest.raises(ValueError):
                test_func()

        first, second = (c.args[0] for c in mock_sleep.call_args_list)
        assert 0.5 <= first <= 1.0
        assert 1.0 <= second <= 2.0


class TestAsyncRetry:
    """Test retry functionality with async functions."""

    @pytest.mark.asyncio
    async def test_async_retry_success_after_failures(self):
        """Test that async function succeeds after some failures."""
        attempt_count = 0

        @retry(max_attempts=3, base_delay=0.1, exceptions=(PricingError,))
        async def fetch_rate():
            nonlocal attempt_count
            attempt_count += 1
            if attempt_count < 3:
                raise PricingError("No USD rate")
            return 1.27

        with patch("pokesnipe.utils.retry.asyncio.sleep", new_callable=AsyncMock) as mock_sleep:
            assert await fetch_rate() == 1.27

        assert attempt_count == 3
        assert mock_sleep.await_count == 2

    @pytest.mark.asyncio
    async def test_async_retry_max_attempts_exceeded(self):
        """Test that async retry stops after max attempts."""
        @retry(max_attempts=2, base_delay=0.1, jitter=False)
        async def test_func():
            raise ValueError("Persistent failure")

        with patch("pokesnipe.utils.retry.asyncio.sleep", new_callable=AsyncMock) as mock_sleep:
            with pytest.raises(ValueError):
                await test_func()

        mock_sleep.assert_awaited_once_with(0.1)


class TestRetryableErrorDetection:
    """Test the retryable error detection utility."""

    def test_retryable_error_types(self):
        """Test that known retryable error types are detected correctly."""
        for error in (ConnectionError("refused"), TimeoutError("timed out"), OSError("unreachable")):
            assert is_retryable_error(error)

    def test_non_retryable_error_types(self):
        for error in (ValueError("Invalid value"), TypeError("Invalid type"), KeyError("Missing key")):
            assert not is_retryable_error(error)

    def test_status_codes(self):
        """Test that throttling and server statuses are retryable."""
        assert is_retryable_error(CatalogError("throttled", status=429))
        assert is_retryable_error(CatalogError("unavailable", status=503))
        assert not is_retryable_error(CatalogError("not found", status=404))

    @pytest.mark.parametrize("message,expected", [
        ("Connection timeout", True),
        ("Rate limit exceeded", True),
        ("Too many requests", True),
        ("Gateway timeout", True),
        ("Invalid input data", False),
        ("Permission denied", False),
    ])
    def test_error_messages(self, message, expected):
        assert is_retryable_error(Exception(message)) is expected


class TestRetryLogging:
    """Test that retries are logged through the given structlog logger."""

    def test_retry_logging_with_logger(self):
        logger = Mock()
        attempt_count = 0

        @retry(max_attempts=3, base_delay=0.1, logger=logger)
        def test_func():
            nonlocal attempt_count
            attempt_count += 1
            if attempt_count < 3:
                raise ValueError("Temporary failure")
            return "success"

        with patch("pokesnipe.utils.retry.time.sleep"):
            test_func()

        assert logger.warning.call_count == 2
        event, = logger.warning.call_args_list[0].args
        assert event == "retrying_call"
        assert logger.warning.call_args_list[1].kwargs["attempt"] == 2
        assert logger.warning.call_args_list[1].kwargs["function"] == "test_func"

    def test_retry_logging_final_failure(self):
        logger = Mock()

        @retry(max_attempts=2, base_delay=0.1, logger=logger)
        def test_func():
            raise ValueError("Persistent failure")

        with patch("pokesnipe.utils.retry.time.sleep"):
            with pytest.raises(ValueError):
                test_func()

        logger.error.assert_called_once()
        assert logger.error.call_args.args == ("retry_exhausted",)
        assert logger.error.call_args.kwargs["attempts"] == 2
