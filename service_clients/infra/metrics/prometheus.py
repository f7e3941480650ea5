"""Prometheus metrics for outbound service invocations."""

from __future__ import annotations

from prometheus_client import CollectorRegistry, Counter, Histogram

# Custom registry so embedding applications control exposition
REGISTRY = CollectorRegistry()

# Covers backend round trips from 5ms to 30s
INVOCATION_LATENCY_BUCKETS = (
    0.005,
    0.01,
    0.025,
    0.05,
    0.1,
    0.25,
    0.5,
    1.0,
    2.5,
    5.0,
    10.0,
    30.0,
)

# ============================================================================
# Invocation Metrics
# ============================================================================

service_invocations_total = Counter(
    "service_invocations_total",
    "Total number of backend function invocations",
    # outcome: success, authentication_error, transport_error, decoding_error, backend_error
    ["service", "function", "outcome"],
    registry=REGISTRY,
)

service_invocation_duration_seconds = Histogram(
    "service_invocation_duration_seconds",
    "Backend function invocation latency in seconds",
    ["service", "function"],
    buckets=INVOCATION_LATENCY_BUCKETS,
    registry=REGISTRY,
)

# ============================================================================
# Retry Metrics
# ============================================================================

retry_attempts_total = Counter(
    "retry_attempts_total",
    "Total number of retry attempts",
    ["operation", "attempt_number"],
    registry=REGISTRY,
)

retry_exhausted_total = Counter(
    "retry_exhausted_total",
    "Total number of operations that exhausted all retries",
    ["operation"],
    registry=REGISTRY,
)

retry_success_after_failure_total = Counter(
    "retry_success_after_failure_total",
    "Total number of operations that succeeded after retry",
    ["operation", "attempts_needed"],
    registry=REGISTRY,
)
