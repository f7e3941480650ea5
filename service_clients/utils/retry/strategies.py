"""Backoff strategy used by the caller-level retry decorator."""

from __future__ import annotations

from collections.abc import Callable
import random

from service_clients.core.exceptions import (
    AuthenticationError,
    BackendError,
    DecodingError,
    TransportError,
)

# Retrying these would resend stale credentials, repeat a rejected call or
# re-decode a response that can never match.
NON_RETRYABLE: tuple[type[Exception], ...] = (
    AuthenticationError,
    BackendError,
    DecodingError,
)


class RetryStrategy:
    """Decides whether a failure is retried and how long to wait first.

    Delays grow exponentially from ``initial_delay`` and are capped at
    ``max_delay``; jitter spreads concurrent callers apart.
    """

    def __init__(
        self,
        initial_delay: float = 0.5,
        max_delay: float = 30.0,
        exponential_base: float = 2.0,
        jitter: bool = True,
        jitter_range: tuple[float, float] = (0.5, 1.5),
        exceptions: tuple[type[Exception], ...] = (TransportError,),
        retry_if: Callable[[Exception], bool] | None = None,
    ) -> None:
        self.initial_delay = initial_delay
        self.max_delay = max_delay
        self.exponential_base = exponential_base
        self.jitter = jitter
        self.jitter_range = jitter_range
        self.exceptions = exceptions
        self.retry_if = retry_if

    def should_retry(self, exception: Exception) -> bool:
        if isinstance(exception, NON_RETRYABLE):
            return False
        if self.retry_if is not None:
            return self.retry_if(exception)
        return isinstance(exception, self.exceptions)

    def calculate_delay(self, attempt: int) -> float:
        delay = min(self.initial_delay * (self.exponential_base**attempt), self.max_delay)
        if self.jitter:
            delay *= random.uniform(*self.jitter_range)
        return delay
