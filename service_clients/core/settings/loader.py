"""LRU-cached settings loaders.

Settings are loaded and validated once, then cached for the lifetime of the process.

Usage:
    from service_clients.core.settings.loader import get_service_settings

    settings = get_service_settings()  # First call: loads and validates
    settings = get_service_settings()  # Subsequent calls: returns cached instance

Testing:
    In tests, clear the cache to force reload:
    clear_all_caches()
"""

from __future__ import annotations

from functools import lru_cache

from .logs import LoggingSettings
from .service import ServiceSettings


@lru_cache(maxsize=1)
def get_service_settings() -> ServiceSettings:
    """Get cached backend service settings.

    Returns:
        Validated and frozen ServiceSettings instance.
    """
    return ServiceSettings()


@lru_cache(maxsize=1)
def get_logging_settings() -> LoggingSettings:
    """Get cached logging settings.

    Returns:
        Validated and frozen LoggingSettings instance.
    """
    return LoggingSettings()


def clear_all_caches() -> None:
    """Clear all settings caches.

    Useful for testing or when you need to force reload settings.
    """
    get_service_settings.cache_clear()
    get_logging_settings.cache_clear()
