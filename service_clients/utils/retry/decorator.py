"""Opt-in retry for callers of service clients.

Facades and the dispatcher never retry: backend functions are not
idempotent, so only the caller can decide that a duplicate side effect is
acceptable. Wrap the call site instead:

    @retry(max_attempts=3, initial_delay=0.5)
    async def notify(client: AwsSesServiceClient) -> AwsSesSendResult:
        return await client.send_email(to, from_, subject, body)
"""

from __future__ import annotations

import asyncio
from functools import wraps
import logging
import time
from typing import TYPE_CHECKING, ParamSpec, TypeVar

from service_clients.core.exceptions import TransportError
from service_clients.infra.metrics.tracking import (
    track_retry_attempt,
    track_retry_exhausted,
    track_retry_success,
)

from .exceptions import RetryError, RetryStatistics
from .strategies import RetryStrategy

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

logger = logging.getLogger(__name__)

P = ParamSpec("P")
R = TypeVar("R")


def retry(
    max_attempts: int = 3,
    initial_delay: float = 0.5,
    max_delay: float = 30.0,
    exponential_base: float = 2.0,
    jitter: bool = True,
    exceptions: tuple[type[Exception], ...] = (TransportError,),
    retry_if: Callable[[Exception], bool] | None = None,
    on_retry: Callable[[Exception, int], None] | None = None,
) -> Callable[[Callable[P, Awaitable[R]]], Callable[P, Awaitable[R]]]:
    """Retry an async call with exponential backoff.

    Authentication, backend and decoding errors are never retried, whatever
    ``exceptions`` or ``retry_if`` say.

    Args:
        max_attempts: Total attempts including the first one.
        initial_delay: Delay before the first retry in seconds.
        max_delay: Upper bound for a single delay.
        exponential_base: Growth factor between delays.
        jitter: Randomize delays to avoid synchronized retries.
        exceptions: Exception types considered transient.
        retry_if: Custom predicate overriding ``exceptions``.
        on_retry: Callback invoked with the failure and attempt number.

    Raises:
        RetryError: When all attempts failed with retryable errors.
    """
    strategy = RetryStrategy(
        initial_delay=initial_delay,
        max_delay=max_delay,
        exponential_base=exponential_base,
        jitter=jitter,
        exceptions=exceptions,
        retry_if=retry_if,
    )

    def decorator(func: Callable[P, Awaitable[R]]) -> Callable[P, Awaitable[R]]:
        @wraps(func)
        async def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
            statistics = RetryStatistics(start_time=time.monotonic())

            for attempt in range(max_attempts):
                try:
                    result = await func(*args, **kwargs)
                except Exception as e:
                    if not strategy.should_retry(e):
                        raise

                    if attempt >= max_attempts - 1:
                        statistics.end_time = time.monotonic()
                        track_retry_exhausted(func.__name__)
                        logger.error(
                            f"All retry attempts exhausted for {func.__name__}",
                            extra={
                                "function": func.__name__,
                                "attempts": attempt + 1,
                                "last_exception": str(e),
                                "total_delay": statistics.total_delay,
                            },
                        )
                        raise RetryError(e, attempt + 1, statistics) from e

                    delay = strategy.calculate_delay(attempt)
                    statistics.attempts += 1
                    statistics.total_delay += delay
                    statistics.exceptions.append(type(e).__name__)
                    track_retry_attempt(func.__name__, attempt + 2)

                    logger.warning(
                        f"Retrying {func.__name__} after {delay:.2f}s (attempt {attempt + 1}/{max_attempts})",
                        extra={
                            "function": func.__name__,
                            "attempt": attempt + 1,
                            "delay": delay,
                            "exception": str(e),
                        },
                    )
                    if on_retry:
                        on_retry(e, attempt + 1)

                    await asyncio.sleep(delay)
                else:
                    if statistics.attempts > 0:
                        track_retry_success(func.__name__, statistics.attempts + 1)
                    return result

            msg = "max_attempts must be at least 1"
            raise ValueError(msg)

        return wrapper

    return decorator
