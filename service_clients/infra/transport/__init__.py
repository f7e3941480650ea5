"""Authenticated session/transport implementations.

All sessions satisfy the ServiceSession protocol consumed by the dispatcher.
"""

from service_clients.infra.transport.base import Credentials, ServiceSession
from service_clients.infra.transport.http import HttpServiceSession
from service_clients.infra.transport.stub import StubServiceSession

__all__ = [
    "Credentials",
    "HttpServiceSession",
    "ServiceSession",
    "StubServiceSession",
]
