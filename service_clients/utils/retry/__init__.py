from __future__ import annotations

from service_clients.utils.retry.decorator import retry
from service_clients.utils.retry.exceptions import RetryError, RetryStatistics
from service_clients.utils.retry.strategies import NON_RETRYABLE, RetryStrategy

__all__ = ["NON_RETRYABLE", "RetryError", "RetryStatistics", "RetryStrategy", "retry"]
