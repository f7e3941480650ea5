"""Logging infrastructure.

Provides structured logging with:
- JSONL format for log aggregation
- Automatic context injection (service, function, etc.)
- OpenTelemetry trace correlation

Basic usage:
    from service_clients.infra.logging import set_log_context, setup_logging
    import logging

    setup_logging()
    logger = logging.getLogger(__name__)

    set_log_context(service="ses1")
    logger.info("Sending")  # Automatically includes service
"""

from service_clients.infra.logging.config import configure_logging, setup_logging
from service_clients.infra.logging.context import (
    ContextInjectingFilter,
    clear_log_context,
    get_log_context,
    remove_from_log_context,
    set_log_context,
)
from service_clients.infra.logging.formatters import JSONFormatter

__all__ = [
    "ContextInjectingFilter",
    "JSONFormatter",
    "clear_log_context",
    "configure_logging",
    "get_log_context",
    "remove_from_log_context",
    "set_log_context",
    "setup_logging",
]
