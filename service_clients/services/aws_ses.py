"""AWS SES email client.

Usage:
    client = AwsSesServiceClient(dispatcher, "ses1")
    result = await client.send_email("a@x.com", "b@x.com", "Hi", "Body")
    print(result.message_id)
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from pydantic import Field

from service_clients.core.schemas.base import FrozenBase

from .base import check_service_name

if TYPE_CHECKING:
    from service_clients.services.dispatcher import CoreDispatcher

logger = logging.getLogger(__name__)

SEND_FUNCTION = "send"


class AwsSesSendResult(FrozenBase):
    """Result of a successful send.

    Attributes:
        message_id: Identifier SES assigned to the message (wire key ``messageId``)
    """

    message_id: str = Field(alias="messageId", min_length=1)


class SendEmailRequest(FrozenBase):
    """Presence-checked arguments of a send.

    Only checks that every value is a non-empty string; address syntax is
    validated by the backend.
    """

    to: str = Field(min_length=1)
    from_: str = Field(alias="from", min_length=1)
    subject: str = Field(min_length=1)
    body: str = Field(min_length=1)

    def to_arguments(self) -> list[str]:
        """Arguments in the order the backend ``send`` function expects."""
        return [self.to, self.from_, self.subject, self.body]


def build_send_email_arguments(to: str, from_: str, subject: str, body: str) -> list[str]:
    """Shape send arguments shared by every email-send client variant.

    Raises:
        pydantic.ValidationError: A value is missing or empty.
    """
    return SendEmailRequest(to=to, from_=from_, subject=subject, body=body).to_arguments()


class AwsSesServiceClient:
    """Sends email through an AWS SES service of the backend application."""

    __slots__ = ("_dispatcher", "_service_name")

    def __init__(self, dispatcher: CoreDispatcher, service_name: str) -> None:
        self._dispatcher = dispatcher
        self._service_name = check_service_name(service_name)

    @property
    def dispatcher(self) -> CoreDispatcher:
        return self._dispatcher

    @property
    def service_name(self) -> str:
        return self._service_name

    async def send_email(
        self,
        to: str,
        from_: str,
        subject: str,
        body: str,
    ) -> AwsSesSendResult:
        """Sends an email.

        Args:
            to: The email address to send the email to.
            from_: The email address to send the email from.
            subject: The subject of the email.
            body: The body text of the email.

        Returns:
            The result of the send.
        """
        arguments = build_send_email_arguments(to, from_, subject, body)
        return await self._dispatcher.invoke(
            SEND_FUNCTION,
            arguments,
            result_type=AwsSesSendResult,
            service=self._service_name,
        )


__all__ = [
    "AwsSesSendResult",
    "AwsSesServiceClient",
    "SEND_FUNCTION",
    "SendEmailRequest",
    "build_send_email_arguments",
]
