"""Tenacity policies built from RetryConfig."""

import asyncio
from collections.abc import Awaitable, Callable
from typing import TypeAlias

from tenacity import (
    AsyncRetrying,
    retry_if_exception,
    stop_after_attempt,
    wait_exponential,
    wait_incrementing,
)
from tenacity.wait import wait_base

from agentsea.platform.agent.config import BackoffStrategy, RetryConfig

SleepFunction: TypeAlias = Callable[[float], Awaitable[None]]


def build_wait(config: RetryConfig) -> wait_base:
    """Build the wait strategy for a retry policy.

    Attempt k (0-indexed) waits initial * (k + 1) for linear backoff or
    initial * 2^k for exponential backoff, clamped to max_delay_ms.
    """
    initial = config.initial_delay_ms / 1000
    maximum = config.max_delay_ms / 1000
    if config.backoff == BackoffStrategy.EXPONENTIAL:
        return wait_exponential(multiplier=initial, exp_base=2, max=maximum)
    return wait_incrementing(start=initial, increment=initial, max=maximum)


def build_retrying(
    config: RetryConfig,
    should_retry: Callable[[BaseException], bool] | None = None,
    sleep: SleepFunction = asyncio.sleep,
) -> AsyncRetrying:
    """Build an AsyncRetrying controller that re-raises the last error.

    Args:
        config: Retry policy
        should_retry: Extra predicate an error must satisfy to be retried
        sleep: Sleep coroutine, injectable for tests

    Returns:
        Configured AsyncRetrying instance
    """

    def _retryable(error: BaseException) -> bool:
        if should_retry is not None and not should_retry(error):
            return False
        return config.is_retryable(error)

    return AsyncRetrying(
        stop=stop_after_attempt(config.max_attempts),
        wait=build_wait(config),
        retry=retry_if_exception(_retryable),
        sleep=sleep,
        reraise=True,
    )
