"""Service client factory.

Builds integration clients bound to one dispatcher, so every client created
by a factory shares the same session and authentication context and fails
or succeeds together on auth issues.

Usage:
    factory = create_service_client_factory()

    ses = factory.aws_ses("ses1")
    sms = factory.twilio("twilio1")
    result = await ses.send_email("a@x.com", "b@x.com", "Hi", "Body")

    # Clients registered by kind
    available = factory.list_kinds()
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from .aws import AwsServiceClient
from .aws_ses import AwsSesServiceClient
from .aws_ses_legacy import AwsSesServiceClientImpl
from .dispatcher import CoreDispatcher
from .twilio import TwilioServiceClient

if TYPE_CHECKING:
    import httpx

    from service_clients.core.settings.service import ServiceSettings

    from .base import ServiceClient

logger = logging.getLogger(__name__)


class ServiceClientFactory:
    """Factory for creating and caching integration clients.

    Features:
    - Registry of client classes by kind ("aws-ses", "twilio", ...)
    - Client caching per (kind, service name); clients are stateless handles
    - Every client is bound to the factory's single dispatcher

    Example:
        factory = ServiceClientFactory(dispatcher)
        client = factory.get_client("aws-ses", "ses1")
        assert client.dispatcher is dispatcher
    """

    def __init__(self, dispatcher: CoreDispatcher) -> None:
        """Initialize factory with builtin clients.

        Args:
            dispatcher: Dispatcher shared by every client built here.
        """
        self._dispatcher = dispatcher
        self._registry: dict[str, type[Any]] = {}
        self._client_cache: dict[tuple[str, str], ServiceClient] = {}

        self._register_builtin_clients()

    def _register_builtin_clients(self) -> None:
        self.register("aws", AwsServiceClient)
        self.register("aws-ses", AwsSesServiceClient)
        self.register("twilio", TwilioServiceClient)
        self.register("aws-ses-legacy", AwsSesServiceClientImpl)

    @property
    def dispatcher(self) -> CoreDispatcher:
        return self._dispatcher

    def register(self, kind: str, client_class: type[Any]) -> None:
        """Register a client class.

        Args:
            kind: Client kind identifier (e.g., "aws-ses")
            client_class: Class constructed as ``client_class(dispatcher, service_name)``
        """
        if not kind:
            msg = "kind must be a non-empty string"
            raise ValueError(msg)
        self._registry[kind] = client_class
        self._clear_cache_for_kind(kind)
        logger.debug("Registered service client: %s", kind)

    def unregister(self, kind: str) -> bool:
        """Unregister a client kind.

        Returns:
            True if the kind was registered and removed
        """
        if kind in self._registry:
            del self._registry[kind]
            self._clear_cache_for_kind(kind)
            logger.debug("Unregistered service client: %s", kind)
            return True
        return False

    def list_kinds(self) -> list[str]:
        """List registered client kinds."""
        return sorted(self._registry)

    def get_client(self, kind: str, service_name: str) -> Any:
        """Get or create a client of `kind` for the named backend service.

        Args:
            kind: Registered client kind
            service_name: Name of the service in the backend application

        Returns:
            Client bound to this factory's dispatcher

        Raises:
            ValueError: If the kind is not registered or the name is empty
        """
        if kind not in self._registry:
            msg = f"Unknown client kind: {kind}. Available: {self.list_kinds()}"
            raise ValueError(msg)

        cache_key = (kind, service_name)
        client = self._client_cache.get(cache_key)
        if client is None:
            client = self._registry[kind](self._dispatcher, service_name)
            self._client_cache[cache_key] = client
            logger.debug(
                f"Created {kind} client",
                extra={"kind": kind, "service": service_name},
            )
        return client

    def aws(self, service_name: str) -> AwsServiceClient:
        return self.get_client("aws", service_name)

    def aws_ses(self, service_name: str) -> AwsSesServiceClient:
        return self.get_client("aws-ses", service_name)

    def twilio(self, service_name: str) -> TwilioServiceClient:
        return self.get_client("twilio", service_name)

    def clear_cache(self) -> None:
        """Drop all cached clients."""
        self._client_cache.clear()

    def _clear_cache_for_kind(self, kind: str) -> None:
        for key in [key for key in self._client_cache if key[0] == kind]:
            del self._client_cache[key]


def create_service_client_factory(
    settings: ServiceSettings | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> ServiceClientFactory:
    """Build session, dispatcher and factory from configuration.

    Args:
        settings: Service settings; loaded via get_service_settings() if omitted.
        transport: Custom httpx transport for the HTTP session.

    Returns:
        Factory whose dispatcher owns a fresh HTTP session. Close it with
        ``await factory.dispatcher.close()``.
    """
    from service_clients.infra.transport.http import HttpServiceSession

    if settings is None:
        from service_clients.core.settings import get_service_settings

        settings = get_service_settings()

    session = HttpServiceSession.from_settings(settings, transport=transport)
    return ServiceClientFactory(CoreDispatcher(session))


__all__ = ["ServiceClientFactory", "create_service_client_factory"]
