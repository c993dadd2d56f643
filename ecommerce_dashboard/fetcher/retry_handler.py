"""Retry handler with a constant delay between attempts."""

import asyncio
from typing import Awaitable, Callable, Optional, TypeVar

from ecommerce_dashboard.monitoring.logger import StructuredLogger

T = TypeVar("T")

RetryCallback = Callable[[int, float], None]
SleepFunc = Callable[[float], Awaitable[None]]


async def retry(
    operation: Callable[[], Awaitable[T]],
    max_attempts: int,
    delay: float,
    on_retry: Optional[RetryCallback] = None,
    sleep: SleepFunc = asyncio.sleep,
    logger: Optional[StructuredLogger] = None
) -> T:
    """
    Await operation() until it succeeds or retries run out.

    A failure with retries remaining waits `delay` seconds and calls the
    operation again; the delay is the same every time. Once no retries
    remain the operation's own exception is re-raised unchanged. Errors
    are never inspected: every Exception is retried the same way.

    Args:
        operation: Zero-argument callable returning an awaitable
        max_attempts: Retries allowed after the first call (0 = single call)
        delay: Seconds to wait before each retry
        on_retry: Called with (attempts_remaining, delay) before each wait
        sleep: Awaitable sleep function, injectable for tests
        logger: Optional structured logger for retry telemetry

    Returns:
        Result of the first successful call

    Raises:
        ValueError: If max_attempts or delay is negative
        Exception: The last exception raised by operation
    """
    if max_attempts < 0:
        raise ValueError(f"max_attempts must be non-negative, got: {max_attempts}")
    if delay < 0:
        raise ValueError(f"delay must be non-negative, got: {delay}")

    remaining = max_attempts
    while True:
        try:
            return await operation()
        except Exception as e:
            if remaining == 0:
                raise

            if logger:
                logger.retry_scheduled(
                    attempts_remaining=remaining,
                    delay_ms=delay * 1000,
                    error=str(e)
                )
            if on_retry:
                on_retry(remaining, delay)

            await sleep(delay)
            remaining -= 1


class RetryHandler:
    """
    Applies one retry policy uniformly to any async call.

    Max retries: 3 (configurable)
    Delay: constant, 1 second by default
    """

    def __init__(
        self,
        max_retries: int = 3,
        delay: float = 1.0,
        on_retry: Optional[RetryCallback] = None,
        sleep: SleepFunc = asyncio.sleep,
        logger: Optional[StructuredLogger] = None
    ):
        """
        Initialize retry handler.

        Args:
            max_retries: Maximum number of retry attempts
            delay: Constant delay between attempts in seconds
            on_retry: Progress callback invoked before each wait
            sleep: Awaitable sleep function
            logger: Optional structured logger
        """
        if max_retries < 0:
            raise ValueError(f"max_retries must be non-negative, got: {max_retries}")
        if delay < 0:
            raise ValueError(f"delay must be non-negative, got: {delay}")
        self.max_retries = max_retries
        self.delay = delay
        self.on_retry = on_retry
        self.sleep = sleep
        self.logger = logger

    async def execute(self, operation: Callable[[], Awaitable[T]]) -> T:
        """
        Execute operation with the handler's retry policy.

        Raises:
            Exception: If all retries exhausted
        """
        return await retry(
            operation,
            self.max_retries,
            self.delay,
            on_retry=self.on_retry,
            sleep=self.sleep,
            logger=self.logger
        )
