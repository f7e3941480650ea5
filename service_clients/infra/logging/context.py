"""Context management for structured logging.

Provides automatic context injection into log records using contextvars,
so fields such as the target service or function name are included in
every log message emitted while an invocation is in flight.

Each asyncio task gets its own copy of the context, so concurrent
invocations on a shared dispatcher never see each other's fields.
"""

from __future__ import annotations

from contextvars import ContextVar
import logging
from typing import Any

_log_context: ContextVar[dict[str, Any]] = ContextVar("log_context", default={})


def set_log_context(**kwargs: Any) -> None:
    """Set logging context for the current async task/thread.

    Args:
        **kwargs: Key-value pairs to add to logging context.

    Example:
        ```python
        set_log_context(service="ses1", function="send")
        logger.info("Dispatching")  # Includes service and function
        ```
    """
    current = _log_context.get().copy()
    current.update(kwargs)
    _log_context.set(current)


def get_log_context() -> dict[str, Any]:
    """Get a copy of the current logging context."""
    return _log_context.get().copy()


def clear_log_context() -> None:
    """Clear all logging context for the current async task/thread."""
    _log_context.set({})


def remove_from_log_context(*keys: str) -> None:
    """Remove specific keys from logging context.

    Args:
        *keys: Keys to remove from context.
    """
    current = _log_context.get().copy()
    for key in keys:
        current.pop(key, None)
    _log_context.set(current)


class ContextInjectingFilter(logging.Filter):
    """Logging filter that injects the contextvars log context into records.

    Attached to the root handlers by configure_logging() so every logger
    benefits without code changes.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        context = _log_context.get()
        for key, value in context.items():
            # Explicit `extra` fields win over context
            if not hasattr(record, key):
                setattr(record, key, value)
        return True


__all__ = [
    "ContextInjectingFilter",
    "clear_log_context",
    "get_log_context",
    "remove_from_log_context",
    "set_log_context",
]
