"""
Retry policy configuration and helpers.

This module provides bounded retry with linear backoff for API calls. The
delay before retry N (N counted from 1) is ``N * backoff_unit`` seconds:
no jitter, no cap.
"""

from __future__ import annotations

import asyncio
import functools
from typing import Any, Awaitable, Callable, TypeVar

from loguru import logger
from pydantic import BaseModel, Field

from .errors import ZaiError

T = TypeVar("T")

DEFAULT_MAX_RETRIES = 2


class RetryPolicy(BaseModel):
    """Configuration for retry behavior.

    Attributes:
        max_retries: Additional attempts after the first one.
        backoff_unit: Seconds multiplied by the retry number to get the delay.
    """

    max_retries: int = Field(default=DEFAULT_MAX_RETRIES, ge=0)
    backoff_unit: float = Field(default=1.0, ge=0.0)

    model_config = {"frozen": True}

    @property
    def max_attempts(self) -> int:
        """Total number of attempts, including the first."""
        return self.max_retries + 1

    def calculate_delay(self, attempt: int) -> float:
        """Calculate the wait before a retry.

        Args:
            attempt: The retry number (1 for the first retry).

        Returns:
            Delay in seconds before that retry.
        """
        return attempt * self.backoff_unit

    def should_retry(self, error: ZaiError) -> bool:
        """Check whether an error is worth another attempt.

        Args:
            error: The error raised by the last attempt.

        Returns:
            False for authentication, bad-request and client-side errors.
        """
        return error.retryable


# Default policy for general use
DEFAULT_RETRY_POLICY = RetryPolicy()


async def retry_async(
    operation: Callable[[], Awaitable[T]],
    policy: RetryPolicy | None = None,
    name: str | None = None,
    on_retry: Callable[[int, ZaiError, float], None] | None = None,
) -> T:
    """Run an async operation with retries.

    Attempts are strictly sequential. Non-ZaiError exceptions, including
    asyncio.CancelledError raised while sleeping, propagate immediately.

    Args:
        operation: Zero-argument coroutine function performing one attempt.
        policy: Retry policy to use. Defaults to DEFAULT_RETRY_POLICY.
        name: Label used in log lines. Defaults to the operation's name.
        on_retry: Optional callback called before each retry with
                  (retry_number, error, delay).

    Returns:
        The result of the first successful attempt.

    Raises:
        ZaiError: The last attempt's error, unchanged.
    """
    retry_policy = policy or DEFAULT_RETRY_POLICY
    label = name or getattr(operation, "__name__", "operation")

    for attempt in range(retry_policy.max_attempts):
        try:
            return await operation()
        except ZaiError as e:
            if not retry_policy.should_retry(e):
                raise

            if attempt + 1 >= retry_policy.max_attempts:
                if retry_policy.max_retries:
                    logger.warning(
                        f"[{e.debug_id}] Max retries ({retry_policy.max_retries}) "
                        f"exceeded for {label}: {e.message}"
                    )
                raise

            delay = retry_policy.calculate_delay(attempt + 1)
            logger.info(
                f"[{e.debug_id}] Retry {attempt + 1}/{retry_policy.max_retries} "
                f"for {label} in {delay:.2f}s ({e.kind.value}): {e.message}"
            )

            if on_retry:
                on_retry(attempt + 1, e, delay)

            await asyncio.sleep(delay)

    raise RuntimeError(f"Retry loop exited unexpectedly in {label}")


def with_retry(
    policy: RetryPolicy | None = None,
    on_retry: Callable[[int, ZaiError, float], None] | None = None,
) -> Callable[[Callable[..., Awaitable[T]]], Callable[..., Awaitable[T]]]:
    """Decorator for retrying async functions.

    Example:
        @with_retry(RetryPolicy(max_retries=4))
        async def fetch_status(task_id: str) -> dict:
            ...
    """

    def decorator(func: Callable[..., Awaitable[T]]) -> Callable[..., Awaitable[T]]:
        @functools.wraps(func)
        async def wrapper(*args: Any, **kwargs: Any) -> T:
            return await retry_async(
                functools.partial(func, *args, **kwargs),
                policy,
                name=func.__name__,
                on_retry=on_retry,
            )

        return wrapper

    return decorator
