"""Base schema classes for request and result models."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class FrozenBase(BaseModel):
    """Base model for immutable values exchanged with the backend.

    Instances are hashable and cannot be modified after validation, so a
    value handed to the dispatcher is exactly the value that gets sent.

    Example:
            class SendResult(FrozenBase):
            message_id: str = Field(alias="messageId")
    """

    model_config = ConfigDict(
        frozen=True,
        # Accept both python names and wire aliases
        populate_by_name=True,
        # Backends may add fields over time
        extra="ignore",
    )
