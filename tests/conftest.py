"""Pytest configuration and shared fixtures.

Organization:
    - Settings Fixtures: cache isolation and environment cleanup
    - Session Fixtures: stub session, dispatcher and client factory
    - Logging Fixtures: log context and root logger isolation
"""

from __future__ import annotations

from collections.abc import Iterator
import logging
import os

import pytest

from service_clients.core.settings import clear_all_caches
from service_clients.infra.logging import clear_log_context
from service_clients.infra.transport import StubServiceSession
from service_clients.services import CoreDispatcher, ServiceClientFactory

# ============================================================================
# Settings Fixtures
# ============================================================================


@pytest.fixture(autouse=True)
def _isolated_settings(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Drop SERVICE_/LOG_ variables and settings caches around every test."""
    for key in list(os.environ):
        if key.startswith(("SERVICE_", "LOG_")):
            monkeypatch.delenv(key, raising=False)
    clear_all_caches()
    yield
    clear_all_caches()


# ============================================================================
# Session Fixtures
# ============================================================================


@pytest.fixture
def stub_session() -> StubServiceSession:
    """In-memory session that records every request.

    Example:
        async def test_send(stub_session, dispatcher):
            stub_session.respond_with("send", {"messageId": "m-1"}, service="ses1")
            await dispatcher.invoke("send", ["a"], service="ses1")
            assert stub_session.requests[0].arguments == ("a",)
    """
    return StubServiceSession()


@pytest.fixture
def dispatcher(stub_session: StubServiceSession) -> CoreDispatcher:
    """Dispatcher bound to the stub session."""
    return CoreDispatcher(stub_session)


@pytest.fixture
def factory(dispatcher: CoreDispatcher) -> ServiceClientFactory:
    """Client factory sharing the stub-backed dispatcher."""
    return ServiceClientFactory(dispatcher)


# ============================================================================
# Logging Fixtures
# ============================================================================


@pytest.fixture(autouse=True)
def _isolated_log_context() -> Iterator[None]:
    yield
    clear_log_context()


@pytest.fixture
def restore_root_logger() -> Iterator[logging.Logger]:
    """Restore root handlers and level after tests that reconfigure logging."""
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    yield root
    root.handlers[:] = handlers
    root.setLevel(level)
    logging.captureWarnings(False)
