"""Tests for the generic AWS client and the Twilio client."""

from __future__ import annotations

from pydantic import ValidationError
import pytest

from service_clients.core.exceptions import TransportError
from service_clients.core.schemas.base import FrozenBase
from service_clients.infra.transport import StubServiceSession
from service_clients.services import (
    AwsRequest,
    AwsServiceClient,
    CoreDispatcher,
    TwilioServiceClient,
)


class PutObjectResult(FrozenBase):
    etag: str


@pytest.mark.unit
class TestAwsServiceClient:
    async def test_execute_sends_single_document(
        self,
        stub_session: StubServiceSession,
        dispatcher: CoreDispatcher,
    ) -> None:
        stub_session.respond_with("execute", {"MessageId": "m-1"}, service="aws1")
        client = AwsServiceClient(dispatcher, "aws1")
        request = AwsRequest(
            service="ses",
            action="SendEmail",
            region="us-east-1",
            arguments={"Source": "b@x.com"},
        )

        result = await client.execute(request)

        assert result == {"MessageId": "m-1"}
        (sent,) = stub_session.requests
        assert sent.name == "execute"
        assert sent.service == "aws1"
        assert sent.arguments == (
            {
                "aws_service": "ses",
                "aws_action": "SendEmail",
                "aws_arguments": {"Source": "b@x.com"},
                "aws_region": "us-east-1",
            },
        )

    async def test_execute_omits_missing_region(
        self,
        stub_session: StubServiceSession,
        dispatcher: CoreDispatcher,
    ) -> None:
        stub_session.respond_with("execute", {"etag": "abc"}, service="aws1")
        client = AwsServiceClient(dispatcher, "aws1")

        result = await client.execute(
            AwsRequest(service="s3", action="PutObject"),
            result_type=PutObjectResult,
        )

        assert result == PutObjectResult(etag="abc")
        assert "aws_region" not in stub_session.requests[0].arguments[0]

    def test_request_requires_service_and_action(self) -> None:
        with pytest.raises(ValidationError):
            AwsRequest(service="", action="SendEmail")


@pytest.mark.unit
class TestTwilioServiceClient:
    async def test_send_message(
        self,
        stub_session: StubServiceSession,
        dispatcher: CoreDispatcher,
    ) -> None:
        stub_session.respond_with("send", None, service="twilio1")
        client = TwilioServiceClient(dispatcher, "twilio1")

        result = await client.send_message("+15550001", "+15550002", "Hello")

        assert result is None
        (sent,) = stub_session.requests
        assert sent.name == "send"
        assert sent.service == "twilio1"
        assert sent.arguments == ({"to": "+15550001", "from": "+15550002", "body": "Hello"},)

    async def test_send_message_with_media(
        self,
        stub_session: StubServiceSession,
        dispatcher: CoreDispatcher,
    ) -> None:
        stub_session.respond_with("send", None, service="twilio1")
        client = TwilioServiceClient(dispatcher, "twilio1")

        await client.send_message(
            "+15550001", "+15550002", "Look", media_url="https://x.com/a.png"
        )

        assert stub_session.requests[0].arguments[0]["mediaUrl"] == "https://x.com/a.png"

    async def test_empty_body_makes_no_call(
        self,
        stub_session: StubServiceSession,
        dispatcher: CoreDispatcher,
    ) -> None:
        client = TwilioServiceClient(dispatcher, "twilio1")

        with pytest.raises(ValidationError):
            await client.send_message("+15550001", "+15550002", "")

        assert stub_session.requests == []

    async def test_transport_error_propagates(
        self,
        stub_session: StubServiceSession,
        dispatcher: CoreDispatcher,
    ) -> None:
        stub_session.fail_with("send", lambda: TransportError("timed out"), service="twilio1")
        client = TwilioServiceClient(dispatcher, "twilio1")

        with pytest.raises(TransportError) as exc_info:
            await client.send_message("+15550001", "+15550002", "Hello")

        assert exc_info.value.service == "twilio1"
