"""HTTP session for calling backend functions.

Provides the authenticated transport used in production with:
- Connection pooling (httpx.AsyncClient)
- Bearer token authentication with serialized refresh
- Mapping of HTTP failures onto the service client error kinds
- Request/response logging

No retries happen here: a timeout surfaces as TransportError and the
caller decides what to do with it.

Usage:
    session = HttpServiceSession(
        base_url="https://stitch.mongodb.com",
        app_id="todo-abcde",
        credentials=Credentials(access_token="...", refresh_token="..."),
    )
    async with session:
        body = await session.call(InvocationRequest(name="send", arguments=(...), service="ses1"))
"""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING, Any

import httpx

from service_clients.core.exceptions import (
    AuthenticationError,
    BackendError,
    DecodingError,
    ServiceClientError,
    TransportError,
)

from .base import Credentials

if TYPE_CHECKING:
    from service_clients.core.schemas.invocation import InvocationRequest
    from service_clients.core.settings.service import ServiceSettings

logger = logging.getLogger(__name__)

API_PREFIX = "/api/client/v2.0"
CALL_PATH = API_PREFIX + "/app/{app_id}/functions/call"
SESSION_PATH = API_PREFIX + "/auth/session"

# Backend error codes meaning the access token is no longer accepted
INVALID_SESSION_CODES = frozenset({"InvalidSession"})


class HttpServiceSession:
    """Authenticated HTTP session bound to one backend application.

    Calls never mutate session state. Only refresh() and set_credentials()
    replace the credentials snapshot, and refreshes are serialized by a lock
    owned by the session.

    Example:
        session = HttpServiceSession.from_settings(get_service_settings())
        dispatcher = CoreDispatcher(session)
    """

    def __init__(
        self,
        base_url: str,
        app_id: str,
        credentials: Credentials | None = None,
        timeout: float = 30.0,
        verify_ssl: bool = True,
        max_connections: int = 100,
        max_keepalive_connections: int = 20,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize HTTP session.

        Args:
            base_url: Base URL of the backend.
            app_id: Client application identifier.
            credentials: Initial tokens; calls fail with AuthenticationError without one.
            timeout: Request timeout in seconds.
            verify_ssl: Verify TLS certificates.
            max_connections: Maximum pooled connections.
            max_keepalive_connections: Maximum idle keep-alive connections.
            transport: Custom httpx transport (e.g. httpx.MockTransport in tests).
        """
        if not app_id:
            msg = "HttpServiceSession requires an app_id"
            raise ValueError(msg)

        self._base_url = base_url.rstrip("/")
        self._app_id = app_id
        self._credentials = credentials or Credentials()
        self._refresh_lock = asyncio.Lock()
        self._call_path = CALL_PATH.format(app_id=app_id)

        self._client = httpx.AsyncClient(
            base_url=self._base_url,
            timeout=httpx.Timeout(timeout),
            verify=verify_ssl,
            limits=httpx.Limits(
                max_keepalive_connections=max_keepalive_connections,
                max_connections=max_connections,
            ),
            transport=transport,
        )

        logger.info(
            "HTTP service session initialized",
            extra={"endpoint": self.endpoint, "timeout": timeout},
        )

    @classmethod
    def from_settings(
        cls,
        settings: ServiceSettings,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> HttpServiceSession:
        """Build a session from ServiceSettings."""
        credentials = Credentials(
            access_token=(
                settings.access_token.get_secret_value() if settings.access_token else None
            ),
            refresh_token=(
                settings.refresh_token.get_secret_value() if settings.refresh_token else None
            ),
        )
        return cls(
            base_url=settings.base_url,
            app_id=settings.app_id,
            credentials=credentials,
            timeout=settings.timeout,
            verify_ssl=settings.verify_ssl,
            max_connections=settings.max_connections,
            max_keepalive_connections=settings.max_keepalive_connections,
            transport=transport,
        )

    @property
    def endpoint(self) -> str:
        return f"{self._base_url}/app/{self._app_id}"

    @property
    def credentials(self) -> Credentials:
        return self._credentials

    def set_credentials(self, credentials: Credentials) -> None:
        """Replace the credentials snapshot (e.g. after an external login)."""
        self._credentials = credentials
        logger.info("Session credentials replaced", extra={"endpoint": self.endpoint})

    async def call(self, request: InvocationRequest) -> Any:
        """Execute one function call.

        Args:
            request: The invocation to send.

        Returns:
            Decoded JSON response body (None for an empty body).

        Raises:
            AuthenticationError: No access token, HTTP 401 or an invalid-session error code.
            TransportError: Connection failure, timeout or a 5xx without error body.
            BackendError: The backend rejected the call.
            DecodingError: The success body is not JSON.
        """
        credentials = self._credentials
        if credentials.access_token is None:
            msg = "Session has no access token; log in before calling functions"
            raise AuthenticationError(msg, service=request.service)

        logger.debug(
            f"POST {self._call_path}",
            extra={"function": request.name, "service": request.service},
        )
        response = await self._post(
            self._call_path,
            json=request.to_wire(),
            token=credentials.access_token,
            what=f"function '{request.name}'",
        )
        logger.debug(
            f"POST {self._call_path} -> {response.status_code}",
            extra={
                "function": request.name,
                "status_code": response.status_code,
                "duration_ms": response.elapsed.total_seconds() * 1000,
            },
        )

        if response.is_success:
            return self._decode_body(response)
        raise self._error_for(response)

    async def refresh(self) -> Credentials:
        """Exchange the refresh token for a new access token.

        Concurrent refreshes are serialized; a refresh that waited on the lock
        still performs its own exchange.

        Returns:
            The new credentials snapshot.

        Raises:
            AuthenticationError: No refresh token, or the backend refused it.
            TransportError: The refresh request failed at network level.
            DecodingError: The response carried no access token.
        """
        async with self._refresh_lock:
            current = self._credentials
            if current.refresh_token is None:
                msg = "Session has no refresh token"
                raise AuthenticationError(msg)

            response = await self._post(
                SESSION_PATH,
                json=None,
                token=current.refresh_token,
                what="session refresh",
            )
            if not response.is_success:
                raise self._error_for(response)

            body = self._decode_body(response)
            access_token = body.get("access_token") if isinstance(body, dict) else None
            if not isinstance(access_token, str) or not access_token:
                msg = "Session refresh response has no access_token"
                raise DecodingError(msg)

            self._credentials = Credentials(
                access_token=access_token,
                refresh_token=current.refresh_token,
            )
            logger.info("Access token refreshed", extra={"endpoint": self.endpoint})
            return self._credentials

    async def _post(
        self,
        path: str,
        json: dict[str, Any] | None,
        token: str,
        what: str,
    ) -> httpx.Response:
        try:
            return await self._client.post(
                path,
                json=json,
                headers={"Authorization": f"Bearer {token}"},
            )
        except httpx.TimeoutException as e:
            msg = f"Timed out calling {what}"
            raise TransportError(msg, extra={"path": path, "cause": type(e).__name__}) from e
        except httpx.TransportError as e:
            msg = f"Network error calling {what}: {e}"
            raise TransportError(msg, extra={"path": path, "cause": type(e).__name__}) from e

    @staticmethod
    def _decode_body(response: httpx.Response) -> Any:
        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as e:
            msg = "Backend returned a non-JSON response body"
            raise DecodingError(
                msg,
                extra={"content_type": response.headers.get("content-type")},
            ) from e

    @staticmethod
    def _error_for(response: httpx.Response) -> ServiceClientError:
        """Map a non-2xx response onto an error kind."""
        status = response.status_code
        extra: dict[str, Any] = {"status_code": status}

        payload: Any = None
        try:
            payload = response.json()
        except ValueError:
            payload = None

        code: str | None = None
        message: str | None = None
        if isinstance(payload, dict):
            raw_code = payload.get("error_code")
            raw_message = payload.get("error")
            code = str(raw_code) if raw_code else None
            message = str(raw_message) if raw_message else None

        if status == httpx.codes.UNAUTHORIZED or code in INVALID_SESSION_CODES:
            return AuthenticationError(message or "Session is invalid or expired", extra=extra)
        if code:
            return BackendError(code, message or code, extra=extra)
        if response.is_server_error:
            return TransportError(f"Backend unavailable (HTTP {status})", extra=extra)
        return BackendError(
            f"HTTP_{status}",
            message or response.reason_phrase or f"HTTP {status}",
            extra=extra,
        )

    async def close(self) -> None:
        """Close the HTTP client and release connections."""
        await self._client.aclose()

    async def __aenter__(self) -> HttpServiceSession:
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()


__all__ = ["HttpServiceSession", "INVALID_SESSION_CODES"]
