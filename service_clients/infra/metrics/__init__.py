"""Prometheus metrics for service invocations and caller-level retries."""

from service_clients.infra.metrics.prometheus import REGISTRY
from service_clients.infra.metrics.tracking import (
    track_invocation,
    track_retry_attempt,
    track_retry_exhausted,
    track_retry_success,
)

__all__ = [
    "REGISTRY",
    "track_invocation",
    "track_retry_attempt",
    "track_retry_exhausted",
    "track_retry_success",
]
