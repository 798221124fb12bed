"""Bounded exponential-backoff retry for LLM calls."""

import asyncio
import logging
import random
from typing import Awaitable, Callable, TypeVar

from pydantic import BaseModel, Field

from ..settings import MAX_RETRIES, RETRY_INITIAL_DELAY_MS

logger = logging.getLogger(__name__)

T = TypeVar("T")

MAX_JITTER_MS = 1000


def is_retryable(error: BaseException) -> bool:
    """Only upstream overload (HTTP 503 / "overloaded") is worth retrying."""
    status = getattr(error, "status_code", None) or getattr(error, "status", None)
    if status == 503:
        return True
    message = str(error)
    return "503" in message or "overloaded" in message


async def with_retry(
    operation: Callable[[], Awaitable[T]],
    max_retries: int = 3,
    initial_delay_ms: int = 1000,
    *,
    sleep: Callable[[float], Awaitable[None]] | None = None,
    rng: Callable[[], float] | None = None,
) -> T:
    """
    Run operation, retrying transient overload errors with backoff.

    The operation runs at most ``max_retries + 1`` times. Before retry
    number ``attempt + 1`` the wrapper sleeps
    ``initial_delay_ms * 2**attempt`` plus up to one second of jitter.
    Non-retryable errors and the error from the final attempt are re-raised
    unchanged.

    Args:
        operation: Zero-argument coroutine factory
        max_retries: Retries after the first attempt
        initial_delay_ms: Delay before the first retry
        sleep: Awaitable sleep in seconds (tests pass a recorder)
        rng: Source of uniform [0, 1) values for jitter

    Returns:
        The operation's result
    """
    sleep = sleep or asyncio.sleep
    rng = rng or random.random

    if max_retries < 0:
        raise ValueError("max_retries must be >= 0")

    attempt = 0
    while True:
        try:
            return await operation()
        except Exception as e:
            if not is_retryable(e) or attempt >= max_retries:
                raise

            delay_ms = initial_delay_ms * (2 ** attempt) + rng() * MAX_JITTER_MS
            logger.warning(
                f"API overloaded, retrying in {delay_ms:.0f}ms "
                f"(attempt {attempt + 1}/{max_retries})"
            )
            await sleep(delay_ms / 1000)
            attempt += 1


class RetryPolicy(BaseModel):
    """Retry configuration for LLM-backed flows."""

    max_retries: int = Field(MAX_RETRIES, ge=0)
    initial_delay_ms: int = Field(RETRY_INITIAL_DELAY_MS, gt=0)

    model_config = {"frozen": True}

    async def run(self, operation: Callable[[], Awaitable[T]]) -> T:
        """Run operation under this policy."""
        return await with_retry(operation, self.max_retries, self.initial_delay_ms)


DEFAULT_RETRY_POLICY = RetryPolicy()
