"""Todo item model displayed by the list adapter."""

from __future__ import annotations

from pydantic import Field

from service_clients.core.schemas.base import FrozenBase


class TodoItem(FrozenBase):
    """One todo item.

    Attributes:
        id: Stable identifier (stored as ``_id`` in documents)
        task: Task text
        checked: Completion state
    """

    id: str = Field(alias="_id", min_length=1)
    task: str = ""
    checked: bool = False
