"""Session protocol shared by every transport.

A session is the authenticated link to one backend application. The
dispatcher only ever reads from it; credential changes (login, refresh)
are the session's own business and must be synchronized inside it.

Usage:
    class MySession:
        @property
        def endpoint(self) -> str:
            return "https://backend.example.com/app/my-app"

        async def call(self, request: InvocationRequest) -> Any:
            ...
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from service_clients.core.schemas.invocation import InvocationRequest


@dataclass(frozen=True)
class Credentials:
    """Immutable snapshot of the tokens a session authenticates with.

    Sessions swap the whole snapshot on refresh, so a call that already
    read its snapshot keeps a consistent token pair.

    Attributes:
        access_token: Bearer token attached to function calls
        refresh_token: Long-lived token exchanged for new access tokens
    """

    access_token: str | None = None
    refresh_token: str | None = None

    @property
    def is_logged_in(self) -> bool:
        return self.access_token is not None

    def __repr__(self) -> str:
        # Never leak tokens into logs or tracebacks
        return (
            f"Credentials(access_token={'***' if self.access_token else None}, "
            f"refresh_token={'***' if self.refresh_token else None})"
        )


@runtime_checkable
class ServiceSession(Protocol):
    """Protocol defining the authenticated transport boundary.

    Implementations must raise:
    - AuthenticationError when the session is invalid or expired
    - TransportError on network failures and timeouts
    - BackendError when the backend rejects the call
    - DecodingError when the response body cannot be decoded

    Every call raises a new error object; the dispatcher annotates it with
    the target service.
    """

    @property
    def endpoint(self) -> str:
        """Identity of the backend application this session talks to."""
        ...

    async def call(self, request: InvocationRequest) -> Any:
        """Execute one function call and return the decoded JSON response."""
        ...


__all__ = ["Credentials", "ServiceSession"]
