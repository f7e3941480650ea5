"""Tests for StubServiceSession."""

from __future__ import annotations

from typing import Any

import pytest

from service_clients.core.exceptions import BackendError, TransportError
from service_clients.core.schemas.invocation import InvocationRequest
from service_clients.infra.transport import ServiceSession, StubServiceSession


@pytest.mark.unit
class TestStubServiceSession:
    def test_satisfies_session_protocol(self, stub_session: StubServiceSession) -> None:
        assert isinstance(stub_session, ServiceSession)
        assert stub_session.endpoint == "stub://app/stub-app"

    async def test_routes_by_service_and_name(self, stub_session: StubServiceSession) -> None:
        stub_session.respond_with("send", "ses", service="ses1")
        stub_session.respond_with("send", "twilio", service="twilio1")

        assert await stub_session.call(InvocationRequest(name="send", service="ses1")) == "ses"
        assert await stub_session.call(InvocationRequest(name="send", service="twilio1")) == "twilio"

    async def test_handler_receives_arguments(self, stub_session: StubServiceSession) -> None:
        received: list[tuple[Any, ...]] = []

        def handler(arguments: tuple[Any, ...]) -> str:
            received.append(arguments)
            return "ok"

        stub_session.register("send", handler)
        await stub_session.call(InvocationRequest(name="send", arguments=("a", 1)))

        assert received == [("a", 1)]

    async def test_async_handler(self, stub_session: StubServiceSession) -> None:
        async def handler(arguments: tuple[Any, ...]) -> int:
            return len(arguments)

        stub_session.register("count", handler)

        assert await stub_session.call(InvocationRequest(name="count", arguments=(1, 2))) == 2

    async def test_fail_with_raises_fresh_errors(self, stub_session: StubServiceSession) -> None:
        stub_session.fail_with("send", lambda: TransportError("timed out"))

        with pytest.raises(TransportError) as first:
            await stub_session.call(InvocationRequest(name="send"))
        with pytest.raises(TransportError) as second:
            await stub_session.call(InvocationRequest(name="send"))

        assert first.value is not second.value
        assert first.value.detail == "timed out"

    async def test_unknown_function_recorded(self, stub_session: StubServiceSession) -> None:
        request = InvocationRequest(name="missing", service="ses1")

        with pytest.raises(BackendError, match="function not found"):
            await stub_session.call(request)

        assert stub_session.requests == [request]
