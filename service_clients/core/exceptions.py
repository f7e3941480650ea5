"""Exception classes raised by service clients.

Every failure of an outbound invocation surfaces as one of the four kinds
below. The dispatcher never swallows them; facades propagate them unchanged.
"""

from __future__ import annotations

from typing import Any


class ServiceClientError(Exception):
    """Base service client exception.

    All invocation failures inherit from this class.

    Attributes:
        detail: Human-readable error message.
        type: Error type identifier.
        service: Name of the integration the failing call targeted, if known.
        extra: Additional context-specific information about the error.

    Example:
            raise ServiceClientError(
            detail="Backend call failed",
            type="service-error",
            service="ses1",
            extra={"function": "send"}
        )
    """

    def __init__(
        self,
        detail: str,
        type: str = "service-error",
        service: str | None = None,
        extra: dict[str, Any] | None = None,
    ) -> None:
        """Initialize service client exception.

        Args:
            detail: Human-readable error message.
            type: Error type identifier.
            service: Integration name for diagnostics.
            extra: Additional context about the error.
        """
        self.detail = detail
        self.type = type
        self.service = service
        self.extra = extra or {}
        super().__init__(detail)

    def __str__(self) -> str:
        if self.service:
            return f"[{self.service}] {self.detail}"
        return self.detail


class AuthenticationError(ServiceClientError):
    """Raised when the session is invalid or expired at call time.

    Never retried locally: retrying would resend the same stale credentials.
    Callers are expected to refresh the session and try again.

    Example:
            raise AuthenticationError(
            detail="invalid session: access token expired",
            extra={"status_code": 401}
        )
    """

    def __init__(
        self,
        detail: str = "Session is invalid or expired",
        type: str = "authentication-error",
        service: str | None = None,
        extra: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(detail=detail, type=type, service=service, extra=extra)


class TransportError(ServiceClientError):
    """Raised on network, connection or timeout failures.

    A candidate for caller-controlled retry with backoff. Retrying may
    duplicate side effects since backend functions are not idempotent.
    """

    def __init__(
        self,
        detail: str,
        type: str = "transport-error",
        service: str | None = None,
        extra: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(detail=detail, type=type, service=service, extra=extra)


class DecodingError(ServiceClientError):
    """Raised when a backend response does not match the requested shape.

    Always a bug or a version skew between client and backend.

    Example:
            raise DecodingError(
            detail="Response is missing required field 'messageId'",
            extra={"result_type": "AwsSesSendResult"}
        )
    """

    def __init__(
        self,
        detail: str,
        type: str = "decoding-error",
        service: str | None = None,
        extra: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(detail=detail, type=type, service=service, extra=extra)


class BackendError(ServiceClientError):
    """Raised when the backend explicitly rejects a call.

    Carries the backend's error code verbatim so callers can branch on it
    (e.g. an invalid recipient).

    Example:
            raise BackendError(
            error_code="InvalidParameter",
            detail="Missing final '@domain'",
        )
    """

    def __init__(
        self,
        error_code: str,
        detail: str,
        type: str = "backend-error",
        service: str | None = None,
        extra: dict[str, Any] | None = None,
    ) -> None:
        """Initialize backend error.

        Args:
            error_code: Error code reported by the backend.
            detail: Error message reported by the backend.
            type: Error type identifier.
            service: Integration name for diagnostics.
            extra: Additional context about the error.
        """
        self.error_code = error_code
        merged_extra = {"error_code": error_code}
        if extra:
            merged_extra.update(extra)
        super().__init__(detail=detail, type=type, service=service, extra=merged_extra)


__all__ = [
    "AuthenticationError",
    "BackendError",
    "DecodingError",
    "ServiceClientError",
    "TransportError",
]
