"""Generic AWS client.

Executes any AWS action through an AWS service of the backend application.
Supersedes the SES-only client.

Usage:
    client = AwsServiceClient(dispatcher, "aws1")
    request = AwsRequest(
        service="ses",
        action="SendEmail",
        region="us-east-1",
        arguments={"Source": "b@x.com", ...},
    )
    result = await client.execute(request)
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, TypeVar, overload

from pydantic import Field

from service_clients.core.schemas.base import FrozenBase

from .base import check_service_name

if TYPE_CHECKING:
    from service_clients.services.dispatcher import CoreDispatcher

EXECUTE_FUNCTION = "execute"

T = TypeVar("T")


class AwsRequest(FrozenBase):
    """An AWS API action to execute.

    Attributes:
        service: AWS service identifier (e.g. ``ses``, ``s3``)
        action: API action name (e.g. ``SendEmail``, ``PutObject``)
        region: Region override; the backend default applies when None
        arguments: Action parameters as documented by AWS
    """

    service: str = Field(min_length=1)
    action: str = Field(min_length=1)
    region: str | None = Field(default=None, min_length=1)
    arguments: dict[str, Any] = Field(default_factory=dict)

    def to_document(self) -> dict[str, Any]:
        document: dict[str, Any] = {
            "aws_service": self.service,
            "aws_action": self.action,
            "aws_arguments": self.arguments,
        }
        if self.region is not None:
            document["aws_region"] = self.region
        return document


class AwsServiceClient:
    """Executes AWS actions through the backend's AWS service."""

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

    @overload
    async def execute(self, request: AwsRequest, result_type: type[T]) -> T: ...

    @overload
    async def execute(self, request: AwsRequest, result_type: None = None) -> Any: ...

    async def execute(self, request: AwsRequest, result_type: Any = None) -> Any:
        """Executes the AWS request.

        Args:
            request: The request to execute.
            result_type: Type to decode the AWS response into; the raw
                response is returned when None.

        Returns:
            The decoded AWS response.
        """
        return await self._dispatcher.invoke(
            EXECUTE_FUNCTION,
            [request.to_document()],
            result_type=result_type,
            service=self._service_name,
        )


__all__ = ["AwsRequest", "AwsServiceClient", "EXECUTE_FUNCTION"]
