"""Tests for the service client exception hierarchy."""

from __future__ import annotations

import pytest

from service_clients.core.exceptions import (
    AuthenticationError,
    BackendError,
    DecodingError,
    ServiceClientError,
    TransportError,
)


@pytest.mark.unit
class TestServiceClientError:
    def test_str_without_service(self) -> None:
        error = ServiceClientError("Backend call failed")

        assert str(error) == "Backend call failed"
        assert error.type == "service-error"
        assert error.extra == {}

    def test_str_prefixes_service(self) -> None:
        error = TransportError("Timed out", service="ses1")

        assert str(error) == "[ses1] Timed out"

    @pytest.mark.parametrize(
        ("error", "expected_type"),
        [
            (AuthenticationError(), "authentication-error"),
            (TransportError("down"), "transport-error"),
            (DecodingError("bad shape"), "decoding-error"),
            (BackendError("InvalidParameter", "bad address"), "backend-error"),
        ],
    )
    def test_kinds_share_base(self, error: ServiceClientError, expected_type: str) -> None:
        assert isinstance(error, ServiceClientError)
        assert error.type == expected_type

    def test_authentication_error_default_detail(self) -> None:
        assert AuthenticationError().detail == "Session is invalid or expired"


@pytest.mark.unit
class TestBackendError:
    def test_carries_code_and_message(self) -> None:
        error = BackendError("InvalidParameter", "Missing final '@domain'")

        assert error.error_code == "InvalidParameter"
        assert error.detail == "Missing final '@domain'"
        assert error.extra == {"error_code": "InvalidParameter"}

    def test_merges_extra(self) -> None:
        error = BackendError("Throttling", "slow down", extra={"status_code": 400})

        assert error.extra == {"error_code": "Throttling", "status_code": 400}
