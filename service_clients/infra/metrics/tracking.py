"""Helper functions for tracking invocation and retry metrics."""

from __future__ import annotations

import logging

from service_clients.infra.metrics import prometheus

logger = logging.getLogger(__name__)


# ============================================================================
# Invocation Tracking
# ============================================================================


def track_invocation(
    service: str | None,
    function: str,
    outcome: str,
    duration_seconds: float,
) -> None:
    """Record one backend invocation.

    Args:
        service: Integration name, or None for app-level functions
        function: Backend function name
        outcome: 'success' or the snake_case error kind
        duration_seconds: Wall-clock duration of the call

    Example:
            track_invocation("ses1", "send", "success", 0.042)
    """
    service_label = service or "-"
    prometheus.service_invocations_total.labels(
        service=service_label,
        function=function,
        outcome=outcome,
    ).inc()
    prometheus.service_invocation_duration_seconds.labels(
        service=service_label,
        function=function,
    ).observe(duration_seconds)


# ============================================================================
# Retry Tracking
# ============================================================================


def track_retry_attempt(operation: str, attempt_number: int) -> None:
    """Track a retry attempt.

    Args:
        operation: Name of the retried operation
        attempt_number: Which attempt this is (2 for the first retry)
    """
    prometheus.retry_attempts_total.labels(
        operation=operation,
        attempt_number=str(attempt_number),
    ).inc()


def track_retry_exhausted(operation: str) -> None:
    """Track an operation that exhausted all retries."""
    prometheus.retry_exhausted_total.labels(operation=operation).inc()
    logger.debug("Tracked retry exhaustion", extra={"operation": operation})


def track_retry_success(operation: str, attempts_needed: int) -> None:
    """Track an operation that succeeded after one or more retries."""
    prometheus.retry_success_after_failure_total.labels(
        operation=operation,
        attempts_needed=str(attempts_needed),
    ).inc()
