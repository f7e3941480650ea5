"""Pydantic Settings v2 configuration.

Settings come from environment variables (or a .env file during development)
and are frozen once loaded. Import them via the cached loaders:

    from service_clients.core.settings import get_service_settings

Configuration precedence (highest to lowest):
    1. init kwargs (testing/overrides)
    2. Environment variables
    3. .env file
"""

from __future__ import annotations

from .loader import clear_all_caches, get_logging_settings, get_service_settings
from .logs import LoggingSettings
from .service import ServiceSettings

__all__ = [
    "LoggingSettings",
    "ServiceSettings",
    "clear_all_caches",
    "get_logging_settings",
    "get_service_settings",
]
