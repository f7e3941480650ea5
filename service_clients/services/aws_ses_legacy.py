"""Deprecated AWS SES email client.

Kept for callers of the old per-service API. It shares nothing with
AwsSesServiceClient beyond the argument shaping and the wire contract, so
removing this module does not affect the current client.
"""

from __future__ import annotations

from typing import TYPE_CHECKING
import warnings

from .aws_ses import SEND_FUNCTION, AwsSesSendResult, build_send_email_arguments
from .base import check_service_name

if TYPE_CHECKING:
    from service_clients.services.dispatcher import CoreDispatcher


class AwsSesServiceClientImpl:
    """Sends email through AWS SES.

    .. deprecated::
        Use AwsServiceClient (or AwsSesServiceClient) instead.
    """

    __slots__ = ("_dispatcher", "_service_name")

    def __init__(self, dispatcher: CoreDispatcher, service_name: str) -> None:
        warnings.warn(
            "AwsSesServiceClientImpl is deprecated; use AwsServiceClient instead",
            DeprecationWarning,
            stacklevel=2,
        )
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
        return await self._dispatcher.invoke(
            SEND_FUNCTION,
            build_send_email_arguments(to, from_, subject, body),
            result_type=AwsSesSendResult,
            service=self._service_name,
        )


__all__ = ["AwsSesServiceClientImpl"]
