"""Invocation request sent through a service session."""

from __future__ import annotations

from typing import Any

from pydantic import Field

from .base import FrozenBase


class InvocationRequest(FrozenBase):
    """One named-function call with an ordered, already-encoded argument list.

    Created per call by the dispatcher and discarded after dispatch.

    Example:
            request = InvocationRequest(
            name="send",
            arguments=("a@x.com", "b@x.com", "Hi", "Body"),
            service="ses1",
        )
    """

    name: str = Field(min_length=1, description="Backend function name")
    arguments: tuple[Any, ...] = Field(
        default=(),
        description="JSON-compatible arguments in the order the function expects",
    )
    service: str | None = Field(
        default=None,
        min_length=1,
        description="Integration the function belongs to; None for app-level functions",
    )

    def to_wire(self) -> dict[str, Any]:
        """Body posted to the function call endpoint."""
        body: dict[str, Any] = {"name": self.name, "arguments": list(self.arguments)}
        if self.service is not None:
            body["service"] = self.service
        return body
