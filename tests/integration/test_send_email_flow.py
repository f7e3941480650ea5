"""End-to-end email send through factory, dispatcher and session."""

from __future__ import annotations

import json
from typing import Any

import httpx
import pytest

from service_clients.core.exceptions import AuthenticationError, BackendError, TransportError
from service_clients.core.settings import ServiceSettings
from service_clients.infra.transport import StubServiceSession
from service_clients.services import (
    CoreDispatcher,
    ServiceClientFactory,
    create_service_client_factory,
)
from service_clients.utils.retry import retry


def ses_backend(arguments: tuple[Any, ...]) -> dict[str, str]:
    to = arguments[0]
    if "@" not in to:
        msg = f"Missing final '@domain' in {to!r}"
        raise BackendError("InvalidParameterValue", msg)
    return {"messageId": f"0100-{to}"}


@pytest.mark.integration
class TestSendEmailAgainstStub:
    async def test_success_returns_message_id(self) -> None:
        session = StubServiceSession()
        session.register("send", ses_backend, service="ses1")
        factory = ServiceClientFactory(CoreDispatcher(session))

        result = await factory.aws_ses("ses1").send_email("a@x.com", "b@x.com", "Hi", "Body")

        assert result.message_id == "0100-a@x.com"

    async def test_rejection_carries_backend_code(self) -> None:
        session = StubServiceSession()
        session.register("send", ses_backend, service="ses1")
        factory = ServiceClientFactory(CoreDispatcher(session))

        with pytest.raises(BackendError) as exc_info:
            await factory.aws_ses("ses1").send_email("not-an-address", "b@x.com", "Hi", "Body")

        assert exc_info.value.error_code == "InvalidParameterValue"
        assert exc_info.value.service == "ses1"


@pytest.mark.integration
class TestSendEmailOverHttp:
    @staticmethod
    def make_factory(handler: Any) -> ServiceClientFactory:
        settings = ServiceSettings(
            _env_file=None,
            base_url="https://backend.example.com",
            app_id="todo-abcde",
            access_token="access-1",
            refresh_token="refresh-1",
        )
        return create_service_client_factory(settings, transport=httpx.MockTransport(handler))

    async def test_success(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            body = json.loads(request.content)
            assert body["service"] == "ses1"
            return httpx.Response(200, json={"messageId": f"0100-{body['arguments'][0]}"})

        factory = self.make_factory(handler)
        async with factory.dispatcher:
            result = await factory.aws_ses("ses1").send_email("a@x.com", "b@x.com", "Hi", "Body")

        assert result.message_id == "0100-a@x.com"

    async def test_expired_session_then_refresh(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            if request.url.path.endswith("/auth/session"):
                return httpx.Response(201, json={"access_token": "access-2"})
            if request.headers["Authorization"] != "Bearer access-2":
                return httpx.Response(401, json={"error": "expired", "error_code": "InvalidSession"})
            return httpx.Response(200, json={"messageId": "0100-abc"})

        factory = self.make_factory(handler)
        ses = factory.aws_ses("ses1")
        async with factory.dispatcher:
            with pytest.raises(AuthenticationError):
                await ses.send_email("a@x.com", "b@x.com", "Hi", "Body")

            await factory.dispatcher.session.refresh()
            result = await ses.send_email("a@x.com", "b@x.com", "Hi", "Body")

        assert result.message_id == "0100-abc"

    async def test_caller_retries_transport_errors(self) -> None:
        attempts = 0

        def handler(request: httpx.Request) -> httpx.Response:
            nonlocal attempts
            attempts += 1
            if attempts == 1:
                return httpx.Response(503)
            return httpx.Response(200, json={"messageId": "0100-abc"})

        factory = self.make_factory(handler)
        ses = factory.aws_ses("ses1")

        @retry(max_attempts=2, initial_delay=0.001, jitter=False)
        async def notify() -> str:
            result = await ses.send_email("a@x.com", "b@x.com", "Hi", "Body")
            return result.message_id

        async with factory.dispatcher:
            assert await notify() == "0100-abc"

        assert attempts == 2

    async def test_unavailable_backend_is_transport_error(self) -> None:
        factory = self.make_factory(lambda request: httpx.Response(503))

        async with factory.dispatcher:
            with pytest.raises(TransportError) as exc_info:
                await factory.twilio("twilio1").send_message("+15550001", "+15550002", "Hi")

        assert exc_info.value.service == "twilio1"
