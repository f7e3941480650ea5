"""Headless list adapter binding todo items to rows.

The adapter owns an immutable snapshot of the items. Each bound row captures
the item it was bound to, so row callbacks always act on that item even if
the list has been replaced or reordered since.

Usage:
    adapter = TodoAdapter(items, updater)
    row = adapter.bind(0)
    row.on_click()        # toggles, calls updater.update_checked(item.id, ...)
    row.on_long_click()   # calls updater.update_task(item.id, item.task)
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
import logging
from typing import Protocol, runtime_checkable

from .models import TodoItem

logger = logging.getLogger(__name__)


@runtime_checkable
class ItemUpdater(Protocol):
    """Callbacks invoked on user interaction with a row."""

    def update_checked(self, item_id: str, is_checked: bool) -> None: ...

    def update_task(self, item_id: str, current_task: str) -> None: ...


class TodoRow:
    """Display state and interaction handlers of one bound row."""

    def __init__(self, item: TodoItem, position: int, updater: ItemUpdater) -> None:
        self._item = item
        self._updater = updater
        self.position = position
        self.task_text = item.task
        self.checked = item.checked

    @property
    def item(self) -> TodoItem:
        return self._item

    def on_checked_changed(self, is_checked: bool) -> None:
        self.checked = is_checked
        self._updater.update_checked(self._item.id, is_checked)

    def on_click(self) -> None:
        self.on_checked_changed(not self.checked)

    def on_long_click(self) -> bool:
        self._updater.update_task(self._item.id, self._item.task)
        return True


class TodoAdapter:
    """Binds an ordered snapshot of todo items to rows."""

    def __init__(self, items: Iterable[TodoItem], updater: ItemUpdater) -> None:
        self._items: tuple[TodoItem, ...] = tuple(items)
        self._updater = updater
        self._observers: list[Callable[[], None]] = []

    @property
    def items(self) -> tuple[TodoItem, ...]:
        return self._items

    @property
    def item_count(self) -> int:
        return len(self._items)

    def bind(self, position: int) -> TodoRow:
        """Bind the item at `position` to a new row.

        Raises:
            IndexError: If position is outside the current snapshot.
        """
        if not 0 <= position < len(self._items):
            msg = f"position {position} out of range for {len(self._items)} items"
            raise IndexError(msg)
        return TodoRow(self._items[position], position, self._updater)

    def update_items(self, items: Iterable[TodoItem]) -> None:
        """Replace the snapshot and notify observers that the data set changed."""
        self._items = tuple(items)
        logger.debug("Todo items updated", extra={"item_count": len(self._items)})
        for observer in list(self._observers):
            observer()

    def add_observer(self, callback: Callable[[], None]) -> None:
        self._observers.append(callback)

    def remove_observer(self, callback: Callable[[], None]) -> None:
        self._observers.remove(callback)
