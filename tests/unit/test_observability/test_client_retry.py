"""Tests for the caller-level retry decorator."""

from __future__ import annotations

import pytest

from service_clients.core.exceptions import (
    AuthenticationError,
    BackendError,
    DecodingError,
    TransportError,
)
from service_clients.infra.metrics import REGISTRY
from service_clients.utils.retry import RetryError, RetryStrategy, retry


@pytest.mark.unit
class TestRetryStrategy:
    def test_delay_grows_and_is_capped(self) -> None:
        strategy = RetryStrategy(initial_delay=1.0, max_delay=5.0, jitter=False)

        assert [strategy.calculate_delay(n) for n in range(4)] == [1.0, 2.0, 4.0, 5.0]

    def test_jitter_stays_in_range(self) -> None:
        strategy = RetryStrategy(initial_delay=1.0, jitter=True, jitter_range=(0.5, 1.5))

        assert all(0.5 <= strategy.calculate_delay(0) <= 1.5 for _ in range(50))

    @pytest.mark.parametrize(
        "error",
        [AuthenticationError(), BackendError("Throttling", "slow"), DecodingError("bad")],
    )
    def test_never_retries_non_transient_kinds(self, error: Exception) -> None:
        strategy = RetryStrategy(exceptions=(Exception,), retry_if=lambda e: True)

        assert strategy.should_retry(error) is False

    def test_retries_transport_errors_by_default(self) -> None:
        assert RetryStrategy().should_retry(TransportError("down")) is True
        assert RetryStrategy().should_retry(ValueError("bad")) is False


@pytest.mark.unit
class TestRetryDecorator:
    async def test_succeeds_after_transient_failures(self) -> None:
        calls = 0
        retried: list[int] = []

        @retry(max_attempts=3, initial_delay=0.001, jitter=False, on_retry=lambda e, n: retried.append(n))
        async def flaky_send() -> str:
            nonlocal calls
            calls += 1
            if calls < 3:
                msg = "timed out"
                raise TransportError(msg)
            return "0100-abc"

        before = REGISTRY.get_sample_value(
            "retry_success_after_failure_total",
            {"operation": "flaky_send", "attempts_needed": "3"},
        ) or 0.0

        assert await flaky_send() == "0100-abc"
        assert calls == 3
        assert retried == [1, 2]
        after = REGISTRY.get_sample_value(
            "retry_success_after_failure_total",
            {"operation": "flaky_send", "attempts_needed": "3"},
        )
        assert after == before + 1

    async def test_raises_retry_error_when_exhausted(self) -> None:
        calls = 0

        @retry(max_attempts=2, initial_delay=0.001, jitter=False)
        async def always_down() -> None:
            nonlocal calls
            calls += 1
            msg = "connection refused"
            raise TransportError(msg)

        with pytest.raises(RetryError) as exc_info:
            await always_down()

        assert calls == 2
        assert exc_info.value.attempts == 2
        assert isinstance(exc_info.value.last_exception, TransportError)
        assert exc_info.value.statistics is not None
        assert exc_info.value.statistics.exceptions == ["TransportError"]

    async def test_authentication_error_not_retried(self) -> None:
        calls = 0

        @retry(max_attempts=5, initial_delay=0.001)
        async def send() -> None:
            nonlocal calls
            calls += 1
            raise AuthenticationError

        with pytest.raises(AuthenticationError):
            await send()

        assert calls == 1

    async def test_other_errors_pass_through(self) -> None:
        @retry(max_attempts=5, initial_delay=0.001)
        async def send() -> None:
            msg = "bad input"
            raise ValueError(msg)

        with pytest.raises(ValueError, match="bad input"):
            await send()

    async def test_zero_attempts_rejected(self) -> None:
        @retry(max_attempts=0)
        async def send() -> None:
            return None

        with pytest.raises(ValueError, match="max_attempts"):
            await send()
