"""In-memory session for development and tests.

Routes calls to registered handlers instead of a backend, and records every
request it receives so tests can assert on the exact outbound arguments.

Usage:
    session = StubServiceSession()
    session.respond_with("send", {"messageId": "abc"}, service="ses1")
    dispatcher = CoreDispatcher(session)
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
import inspect
import logging
from typing import TYPE_CHECKING, Any

from service_clients.core.exceptions import BackendError

if TYPE_CHECKING:
    from service_clients.core.schemas.invocation import InvocationRequest

logger = logging.getLogger(__name__)

Handler = Callable[[tuple[Any, ...]], Any | Awaitable[Any]]


class StubServiceSession:
    """Session that answers calls from registered handlers.

    Handlers receive the encoded argument tuple and return the raw response
    (or an awaitable of it). Exceptions raised by handlers propagate
    unchanged, which is how tests simulate auth, transport and backend
    failures. A handler must raise a new error object on every call.
    Unknown functions fail with a FunctionNotFound BackendError.
    """

    def __init__(self, endpoint: str = "stub://app/stub-app") -> None:
        self._endpoint = endpoint
        self._handlers: dict[tuple[str | None, str], Handler] = {}
        self.requests: list[InvocationRequest] = []

    @property
    def endpoint(self) -> str:
        return self._endpoint

    def register(self, name: str, handler: Handler, *, service: str | None = None) -> None:
        """Route calls of `name` on `service` to `handler`."""
        self._handlers[(service, name)] = handler

    def respond_with(self, name: str, response: Any, *, service: str | None = None) -> None:
        """Answer every call of `name` on `service` with `response`."""
        self.register(name, lambda _args: response, service=service)

    def fail_with(
        self,
        name: str,
        error_factory: Callable[[], Exception],
        *,
        service: str | None = None,
    ) -> None:
        """Raise a fresh `error_factory()` on every call of `name` on `service`.

        Example:
            session.fail_with("send", AuthenticationError, service="ses1")
            session.fail_with("send", lambda: TransportError("timed out"))
        """

        def _raise(_args: tuple[Any, ...]) -> Any:
            raise error_factory()

        self.register(name, _raise, service=service)

    async def call(self, request: InvocationRequest) -> Any:
        self.requests.append(request)
        handler = self._handlers.get((request.service, request.name))
        if handler is None:
            msg = f"function not found: '{request.name}'"
            raise BackendError("FunctionNotFound", msg)

        logger.debug(
            "Stub call",
            extra={"function": request.name, "service": request.service},
        )
        result = handler(request.arguments)
        if inspect.isawaitable(result):
            result = await result
        return result


__all__ = ["Handler", "StubServiceSession"]
