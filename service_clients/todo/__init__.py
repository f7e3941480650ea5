"""Todo list adapter boundary."""

from service_clients.todo.adapter import ItemUpdater, TodoAdapter, TodoRow
from service_clients.todo.models import TodoItem

__all__ = ["ItemUpdater", "TodoAdapter", "TodoItem", "TodoRow"]
