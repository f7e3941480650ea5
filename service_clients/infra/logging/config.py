"""Logging configuration setup.

Provides logging configuration using:
- dictConfig for flexible configuration
- ContextInjectingFilter for automatic context propagation
- All handlers on root logger (child loggers propagate)
- JSONL format for machine parsing
"""

from __future__ import annotations

import logging
import logging.config
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from service_clients.core.settings.logs import LoggingSettings

logger = logging.getLogger(__name__)
_LOGGING_INITIALIZED = False


def setup_logging(
    log_settings: LoggingSettings | None = None,
    *,
    force: bool = False,
    **configure_kwargs: Any,
) -> None:
    """Ensure logging is configured once across entrypoints.

    Args:
        log_settings: Optional logging settings instance. If omitted, settings
            are loaded via get_logging_settings().
        force: Reconfigure logging even if it was already initialized.
        **configure_kwargs: Explicit overrides for configure_logging().
    """
    global _LOGGING_INITIALIZED

    if _LOGGING_INITIALIZED and not force:
        return

    settings_obj = log_settings
    if settings_obj is None:
        from service_clients.core.settings import get_logging_settings

        settings_obj = get_logging_settings()

    log_config = settings_obj.to_logging_kwargs()
    if configure_kwargs:
        log_config = {**log_config, **configure_kwargs}

    configure_logging(**log_config)
    _LOGGING_INITIALIZED = True


def configure_logging(
    log_level: str = "INFO",
    service_name: str = "service-clients",
    json_logs: bool = True,
    console_enabled: bool = True,
    include_context: bool = True,
    capture_warnings: bool = True,
    include_process_info: bool = False,
    include_thread_info: bool = False,
    **kwargs: Any,
) -> None:
    """Configure logging with dictConfig.

    Args:
        log_level: Root logger level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        service_name: Static service field added to JSON records.
        json_logs: Enable JSONL (JSON Lines) structured logging.
        console_enabled: Enable console/stderr logging.
        include_context: Enable ContextInjectingFilter for auto context.
        capture_warnings: Forward Python warnings (e.g. DeprecationWarning
            from legacy clients) to the logging system.
        include_process_info: Include process ID and name in records.
        include_thread_info: Include thread ID and name in records.
        **kwargs: Ignored extra settings.

    Example:
        from service_clients.core.settings import get_logging_settings
        configure_logging(**get_logging_settings().to_logging_kwargs())
    """
    if kwargs:
        logger.debug("Unused logging kwargs supplied: %s", ", ".join(sorted(kwargs.keys())))

    if capture_warnings:
        logging.captureWarnings(True)

    formatter_name = "json" if json_logs else "text"
    handlers: dict[str, Any] = {}
    if console_enabled:
        handlers["console"] = {
            "class": "logging.StreamHandler",
            "level": log_level.upper(),
            "formatter": formatter_name,
            "filters": ["context"] if include_context else [],
        }

    logging_config: dict[str, Any] = {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": _build_formatters_config(
            service_name=service_name,
            include_process_info=include_process_info,
            include_thread_info=include_thread_info,
        ),
        "filters": _build_filters_config(include_context=include_context),
        "handlers": handlers,
        "root": {
            "level": log_level.upper(),
            "handlers": list(handlers),
        },
    }

    logging.config.dictConfig(logging_config)


def _build_formatters_config(
    service_name: str,
    include_process_info: bool,
    include_thread_info: bool,
) -> dict[str, Any]:
    """Build formatters configuration for dictConfig."""
    format_parts = ["%(asctime)s", "%(levelname)s", "%(name)s"]
    if include_process_info:
        format_parts.append("[%(processName)s:%(process)d]")
    if include_thread_info:
        format_parts.append("[%(threadName)s:%(thread)d]")
    format_parts.append("%(message)s")

    return {
        "json": {
            "()": "service_clients.infra.logging.formatters.JSONFormatter",
            "fmt_keys": {
                "level": "levelname",
                "logger": "name",
                "message": "message",
            },
            "static": {"service_name": service_name},
            "include_process_info": include_process_info,
            "include_thread_info": include_thread_info,
        },
        "text": {
            "format": " - ".join(format_parts),
            "datefmt": "%Y-%m-%d %H:%M:%S",
        },
    }


def _build_filters_config(include_context: bool) -> dict[str, Any]:
    """Build filters configuration for dictConfig."""
    filters: dict[str, Any] = {}
    if include_context:
        filters["context"] = {
            "()": "service_clients.infra.logging.context.ContextInjectingFilter",
        }
    return filters
