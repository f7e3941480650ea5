"""Core dispatcher shared by every integration client.

The dispatcher is the single funnel for outbound calls. It encodes
arguments, hands one InvocationRequest to the session, decodes the raw
response into the type the facade asks for, and normalizes failures into
the service client error kinds. Facades hold no transport logic at all.

Usage:
    dispatcher = CoreDispatcher(session)
    result = await dispatcher.invoke(
        "send",
        ["a@x.com", "b@x.com", "Hi", "Body"],
        result_type=AwsSesSendResult,
        service="ses1",
    )
"""

from __future__ import annotations

from collections.abc import Sequence
from functools import lru_cache
import json
import logging
import time
from typing import Any, TypeVar, overload

import httpx
from pydantic import BaseModel, TypeAdapter, ValidationError
from pydantic_core import PydanticSerializationError, to_jsonable_python

from service_clients.core.exceptions import (
    AuthenticationError,
    BackendError,
    DecodingError,
    ServiceClientError,
    TransportError,
)
from service_clients.core.schemas.invocation import InvocationRequest
from service_clients.infra.metrics.tracking import track_invocation
from service_clients.infra.transport.base import ServiceSession

logger = logging.getLogger(__name__)

T = TypeVar("T")

_OUTCOMES: dict[type[ServiceClientError], str] = {
    AuthenticationError: "authentication_error",
    TransportError: "transport_error",
    DecodingError: "decoding_error",
    BackendError: "backend_error",
}


@lru_cache(maxsize=128)
def _adapter_for(result_type: Any) -> TypeAdapter[Any]:
    return TypeAdapter(result_type)


def encode_argument(value: Any) -> Any:
    """Encode one argument into a JSON-compatible value.

    Pydantic models are dumped by alias so wire names are used. NaN and
    infinities have no JSON form and are rejected like unknown types.

    Raises:
        TypeError: If the value cannot be encoded.
    """
    try:
        if isinstance(value, BaseModel):
            encoded = value.model_dump(mode="json", by_alias=True, exclude_none=True)
        else:
            encoded = to_jsonable_python(value)
        json.dumps(encoded, allow_nan=False)
    except (PydanticSerializationError, ValueError) as e:
        msg = f"Argument of type {type(value).__name__} is not encodable: {e}"
        raise TypeError(msg) from e
    return encoded


def _outcome_of(error: ServiceClientError) -> str:
    for kind, outcome in _OUTCOMES.items():
        if isinstance(error, kind):
            return outcome
    return "error"


class CoreDispatcher:
    """Performs authenticated function calls on behalf of all integrations.

    A dispatcher is immutable once built: its session and endpoint are
    read-only, and invoke() never mutates shared state, so any number of
    concurrent invocations may share one instance without locking.

    Example:
        dispatcher = CoreDispatcher(HttpServiceSession.from_settings(settings))
        factory = ServiceClientFactory(dispatcher)
        ses = factory.aws_ses("ses1")
    """

    __slots__ = ("_endpoint", "_session")

    def __init__(self, session: ServiceSession) -> None:
        """Bind the dispatcher to a session.

        Args:
            session: Authenticated session owned by this dispatcher.
        """
        object.__setattr__(self, "_session", session)
        object.__setattr__(self, "_endpoint", session.endpoint)

    def __setattr__(self, name: str, value: Any) -> None:
        msg = f"{type(self).__name__} is immutable"
        raise AttributeError(msg)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(endpoint={self._endpoint!r})"

    @property
    def session(self) -> ServiceSession:
        return self._session

    @property
    def endpoint(self) -> str:
        return self._endpoint

    async def close(self) -> None:
        """Release the session, if it holds resources.

        Call only once every client built on this dispatcher is done.
        """
        close = getattr(self._session, "close", None)
        if close is not None:
            await close()

    async def __aenter__(self) -> CoreDispatcher:
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    @overload
    async def invoke(
        self,
        function_name: str,
        arguments: Sequence[Any] = (),
        *,
        result_type: type[T],
        service: str | None = None,
    ) -> T: ...

    @overload
    async def invoke(
        self,
        function_name: str,
        arguments: Sequence[Any] = (),
        *,
        result_type: None = None,
        service: str | None = None,
    ) -> Any: ...

    async def invoke(
        self,
        function_name: str,
        arguments: Sequence[Any] = (),
        *,
        result_type: Any = None,
        service: str | None = None,
    ) -> Any:
        """Invoke a named backend function and decode its result.

        Exactly one session call is made. Nothing is cached or retried.

        Args:
            function_name: Non-empty backend function name.
            arguments: Ordered arguments, each independently encodable.
            result_type: Type to decode the response into; None returns the
                raw decoded JSON.
            service: Integration the function belongs to.

        Returns:
            The decoded result.

        Raises:
            ValueError: Empty function name.
            TypeError: An argument cannot be encoded.
            AuthenticationError: Session invalid or expired.
            TransportError: Network failure or timeout.
            DecodingError: Response does not match result_type.
            BackendError: The backend rejected the call.
        """
        if not function_name:
            msg = "function_name must be a non-empty identifier"
            raise ValueError(msg)
        if isinstance(arguments, (str, bytes)):
            msg = "arguments must be a sequence of values, not a string"
            raise TypeError(msg)

        request = InvocationRequest(
            name=function_name,
            arguments=tuple(encode_argument(arg) for arg in arguments),
            service=service,
        )

        start = time.perf_counter()
        try:
            raw = await self._call(request)
            result = raw if result_type is None else self._decode(raw, result_type, request)
        except ServiceClientError as e:
            duration = time.perf_counter() - start
            if e.service is None:
                e.service = service
            track_invocation(service, function_name, _outcome_of(e), duration)
            logger.warning(
                f"Invocation of {function_name} failed: {e.type}",
                extra={
                    "service": service,
                    "function": function_name,
                    "error_type": e.type,
                    "duration_ms": int(duration * 1000),
                },
            )
            raise

        duration = time.perf_counter() - start
        track_invocation(service, function_name, "success", duration)
        logger.debug(
            f"Invocation of {function_name} succeeded",
            extra={
                "service": service,
                "function": function_name,
                "duration_ms": int(duration * 1000),
            },
        )
        return result

    async def _call(self, request: InvocationRequest) -> Any:
        try:
            return await self._session.call(request)
        except httpx.HTTPError as e:
            # Sessions should map these themselves; never let one escape raw
            msg = f"Transport failure calling {request.name}: {e}"
            raise TransportError(msg, extra={"cause": type(e).__name__}) from e

    @staticmethod
    def _decode(raw: Any, result_type: Any, request: InvocationRequest) -> Any:
        try:
            # Responses carry wire names only; field names are for local construction
            return _adapter_for(result_type).validate_python(raw, by_alias=True, by_name=False)
        except ValidationError as e:
            type_name = getattr(result_type, "__name__", repr(result_type))
            logger.exception(
                f"Response of {request.name} does not match {type_name}",
                extra={
                    "service": request.service,
                    "function": request.name,
                    "errors": e.errors(include_url=False, include_input=False),
                },
            )
            msg = f"Response of {request.name} does not match {type_name}: {e.error_count()} error(s)"
            raise DecodingError(
                msg,
                service=request.service,
                extra={"result_type": type_name},
            ) from e


__all__ = ["CoreDispatcher", "encode_argument"]
