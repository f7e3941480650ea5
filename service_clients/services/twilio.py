"""Twilio SMS/MMS client."""

from __future__ import annotations

from typing import TYPE_CHECKING

from pydantic import Field

from service_clients.core.schemas.base import FrozenBase

from .base import check_service_name

if TYPE_CHECKING:
    from service_clients.services.dispatcher import CoreDispatcher

SEND_FUNCTION = "send"


class SendMessageRequest(FrozenBase):
    """Document argument of the Twilio ``send`` function."""

    to: str = Field(min_length=1)
    from_: str = Field(alias="from", min_length=1)
    body: str = Field(min_length=1)
    media_url: str | None = Field(default=None, alias="mediaUrl", min_length=1)


class TwilioServiceClient:
    """Sends text and media messages through a Twilio service."""

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

    async def send_message(
        self,
        to: str,
        from_: str,
        body: str,
        media_url: str | None = None,
    ) -> None:
        """Sends an SMS/MMS message.

        Args:
            to: The number to send the message to.
            from_: The number that the message is from.
            body: The message body.
            media_url: Optional URL of media to attach (MMS).
        """
        request = SendMessageRequest(to=to, from_=from_, body=body, media_url=media_url)
        await self._dispatcher.invoke(
            SEND_FUNCTION,
            [request],
            service=self._service_name,
        )


__all__ = ["SendMessageRequest", "TwilioServiceClient"]
