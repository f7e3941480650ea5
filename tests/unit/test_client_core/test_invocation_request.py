"""Tests for InvocationRequest."""

from __future__ import annotations

from pydantic import ValidationError
import pytest

from service_clients.core.schemas.invocation import InvocationRequest


@pytest.mark.unit
class TestInvocationRequest:
    def test_to_wire_with_service(self) -> None:
        request = InvocationRequest(name="send", arguments=("a", "b"), service="ses1")

        assert request.to_wire() == {
            "name": "send",
            "arguments": ["a", "b"],
            "service": "ses1",
        }

    def test_to_wire_omits_missing_service(self) -> None:
        request = InvocationRequest(name="ping")

        assert request.to_wire() == {"name": "ping", "arguments": []}

    def test_empty_name_rejected(self) -> None:
        with pytest.raises(ValidationError):
            InvocationRequest(name="")

    def test_frozen(self) -> None:
        request = InvocationRequest(name="send")

        with pytest.raises(ValidationError):
            request.name = "other"
