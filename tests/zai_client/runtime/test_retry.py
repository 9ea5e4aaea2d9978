"""Unit tests for RetryPolicy and the retry helpers."""

import asyncio
import time
from unittest.mock import AsyncMock, call, patch

import pytest

from zai_client.runtime.errors import ErrorKind, ZaiError
from zai_client.runtime.retry import (
    DEFAULT_RETRY_POLICY,
    RetryPolicy,
    retry_async,
    with_retry,
)


def _error(kind: ErrorKind, message: str = "failed") -> ZaiError:
    return ZaiError(kind=kind, message=message)


class TestRetryPolicy:
    """Tests for RetryPolicy configuration."""

    def test_default_values(self):
        """Should default to two retries and one-second steps."""
        policy = RetryPolicy()

        assert policy.max_retries == 2
        assert policy.max_attempts == 3
        assert policy.backoff_unit == 1.0

    def test_zero_retries_means_one_attempt(self):
        assert RetryPolicy(max_retries=0).max_attempts == 1

    def test_rejects_negative_retries(self):
        with pytest.raises(Exception):
            RetryPolicy(max_retries=-1)

    def test_is_frozen(self):
        """Should be immutable."""
        policy = RetryPolicy()
        with pytest.raises(Exception):
            policy.max_retries = 10

    def test_default_policy_exists(self):
        assert isinstance(DEFAULT_RETRY_POLICY, RetryPolicy)


class TestCalculateDelay:
    """Tests for delay calculation."""

    def test_linear_backoff(self):
        """Delay grows linearly with the retry number."""
        policy = RetryPolicy(backoff_unit=1.0)

        assert policy.calculate_delay(1) == 1.0
        assert policy.calculate_delay(2) == 2.0
        assert policy.calculate_delay(3) == 3.0

    def test_delay_is_uncapped_and_deterministic(self):
        policy = RetryPolicy(backoff_unit=0.5)

        assert policy.calculate_delay(100) == 50.0
        assert {policy.calculate_delay(2) for _ in range(10)} == {1.0}


class TestShouldRetry:
    """Tests for retry eligibility."""

    @pytest.mark.parametrize("kind", [ErrorKind.AUTHENTICATION, ErrorKind.BAD_REQUEST])
    def test_permanent_kinds_are_not_retried(self, kind):
        assert RetryPolicy().should_retry(_error(kind)) is False

    @pytest.mark.parametrize(
        "kind",
        [ErrorKind.RATE_LIMITED, ErrorKind.OVERLOADED, ErrorKind.STATUS, ErrorKind.TIMEOUT],
    )
    def test_transient_kinds_are_retried(self, kind):
        assert RetryPolicy().should_retry(_error(kind)) is True


class TestRetryAsync:
    """Tests for retry_async."""

    @pytest.mark.asyncio
    async def test_returns_value_on_success(self):
        operation = AsyncMock(return_value="success")

        result = await retry_async(operation)

        assert result == "success"
        assert operation.await_count == 1

    @pytest.mark.asyncio
    @pytest.mark.parametrize("max_retries", [0, 1, 2, 4])
    async def test_makes_n_plus_one_attempts_and_raises_last_error(self, max_retries):
        """An always-failing retryable operation is attempted n + 1 times."""
        errors = [
            _error(ErrorKind.OVERLOADED, f"attempt {i}") for i in range(max_retries + 1)
        ]
        operation = AsyncMock(side_effect=errors)

        with patch("zai_client.runtime.retry.asyncio.sleep", new_callable=AsyncMock):
            with pytest.raises(ZaiError) as exc_info:
                await retry_async(operation, RetryPolicy(max_retries=max_retries))

        assert operation.await_count == max_retries + 1
        assert exc_info.value is errors[-1]

    @pytest.mark.asyncio
    async def test_sleeps_linearly_between_attempts(self):
        """Waits 1, 2, ... units before each retry, never before the first."""
        operation = AsyncMock(
            side_effect=[_error(ErrorKind.STATUS), _error(ErrorKind.STATUS), "ok"]
        )

        with patch(
            "zai_client.runtime.retry.asyncio.sleep", new_callable=AsyncMock
        ) as mock_sleep:
            result = await retry_async(operation, RetryPolicy(max_retries=2, backoff_unit=1.0))

        assert result == "ok"
        assert mock_sleep.await_args_list == [call(1.0), call(2.0)]

    @pytest.mark.asyncio
    @pytest.mark.parametrize("kind", [ErrorKind.AUTHENTICATION, ErrorKind.BAD_REQUEST])
    async def test_permanent_error_stops_after_one_attempt(self, kind):
        operation = AsyncMock(side_effect=_error(kind))

        with patch(
            "zai_client.runtime.retry.asyncio.sleep", new_callable=AsyncMock
        ) as mock_sleep:
            with pytest.raises(ZaiError) as exc_info:
                await retry_async(operation, RetryPolicy(max_retries=5))

        assert exc_info.value.kind is kind
        assert operation.await_count == 1
        mock_sleep.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_non_zai_errors_propagate_immediately(self):
        operation = AsyncMock(side_effect=KeyError("boom"))

        with pytest.raises(KeyError):
            await retry_async(operation, RetryPolicy(max_retries=3, backoff_unit=0.0))

        assert operation.await_count == 1

    @pytest.mark.asyncio
    async def test_calls_on_retry_callback(self):
        """Should call on_retry with (retry_number, error, delay)."""
        retry_calls = []

        def on_retry(attempt, exc, delay):
            retry_calls.append((attempt, exc.message, delay))

        operation = AsyncMock(
            side_effect=[
                _error(ErrorKind.RATE_LIMITED, "first"),
                _error(ErrorKind.RATE_LIMITED, "second"),
                "done",
            ]
        )

        await retry_async(
            operation,
            RetryPolicy(max_retries=2, backoff_unit=0.0),
            on_retry=on_retry,
        )

        assert retry_calls == [(1, "first", 0.0), (2, "second", 0.0)]


class TestCancellation:
    """Cancellation must interrupt backoff and surface as cancellation."""

    @pytest.mark.asyncio
    async def test_cancel_during_backoff_raises_cancelled_error(self):
        calls = 0

        async def failing():
            nonlocal calls
            calls += 1
            raise _error(ErrorKind.OVERLOADED, "busy")

        task = asyncio.create_task(
            retry_async(failing, RetryPolicy(max_retries=3, backoff_unit=30.0))
        )
        while calls == 0:
            await asyncio.sleep(0)

        started = time.monotonic()
        task.cancel()
        with pytest.raises(asyncio.CancelledError):
            await task

        assert time.monotonic() - started < 1.0
        assert calls == 1

    @pytest.mark.asyncio
    async def test_caller_deadline_is_not_a_timeout_error_kind(self):
        """A caller-side deadline cancels the wait instead of producing a ZaiError."""

        async def failing():
            raise _error(ErrorKind.INTERNAL_SERVER)

        started = time.monotonic()
        with pytest.raises(asyncio.TimeoutError) as exc_info:
            await asyncio.wait_for(
                retry_async(failing, RetryPolicy(max_retries=3, backoff_unit=30.0)),
                timeout=0.05,
            )

        assert not isinstance(exc_info.value, ZaiError)
        assert time.monotonic() - started < 1.0


class TestWithRetryDecorator:
    """Tests for the with_retry decorator."""

    @pytest.mark.asyncio
    async def test_retries_decorated_function(self):
        call_count = 0

        @with_retry(RetryPolicy(max_retries=2, backoff_unit=0.0))
        async def flaky(value):
            nonlocal call_count
            call_count += 1
            if call_count < 3:
                raise _error(ErrorKind.TIMEOUT, "try again")
            return value * 2

        assert await flaky(21) == 42
        assert call_count == 3

    @pytest.mark.asyncio
    async def test_preserves_function_name(self):
        @with_retry()
        async def fetch_status():
            return "ok"

        assert fetch_status.__name__ == "fetch_status"
        assert await fetch_status() == "ok"
