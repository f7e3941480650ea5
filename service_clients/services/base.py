"""Protocols implemented by integration clients.

Clients are thin, stateless handles: a dispatcher reference plus the name of
the backend service they target. Variants of the same capability implement
the same protocol side by side instead of inheriting from each other.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from service_clients.services.aws_ses import AwsSesSendResult
    from service_clients.services.dispatcher import CoreDispatcher


@runtime_checkable
class ServiceClient(Protocol):
    """Any integration client bound to a dispatcher."""

    @property
    def dispatcher(self) -> CoreDispatcher: ...

    @property
    def service_name(self) -> str: ...


@runtime_checkable
class EmailSender(Protocol):
    """Email-send capability.

    Example:
        async def welcome(sender: EmailSender, to: str) -> str:
            result = await sender.send_email(to, "noreply@x.com", "Welcome", "Hello!")
            return result.message_id
    """

    @property
    def service_name(self) -> str: ...

    async def send_email(
        self,
        to: str,
        from_: str,
        subject: str,
        body: str,
    ) -> AwsSesSendResult: ...


def check_service_name(service_name: str) -> str:
    """Validate the service name a client is bound to."""
    if not service_name:
        msg = "service_name must be a non-empty string"
        raise ValueError(msg)
    return service_name


__all__ = ["EmailSender", "ServiceClient", "check_service_name"]
