"""Integration clients and the dispatcher they share.

Example:
    from service_clients.services import create_service_client_factory

    factory = create_service_client_factory()
    result = await factory.aws_ses("ses1").send_email(to, from_, subject, body)
"""

from service_clients.services.aws import AwsRequest, AwsServiceClient
from service_clients.services.aws_ses import (
    AwsSesSendResult,
    AwsSesServiceClient,
    SendEmailRequest,
)
from service_clients.services.aws_ses_legacy import AwsSesServiceClientImpl
from service_clients.services.base import EmailSender, ServiceClient
from service_clients.services.dispatcher import CoreDispatcher
from service_clients.services.registry import (
    ServiceClientFactory,
    create_service_client_factory,
)
from service_clients.services.twilio import SendMessageRequest, TwilioServiceClient

__all__ = [
    "AwsRequest",
    "AwsServiceClient",
    "AwsSesSendResult",
    "AwsSesServiceClient",
    "AwsSesServiceClientImpl",
    "CoreDispatcher",
    "EmailSender",
    "SendEmailRequest",
    "SendMessageRequest",
    "ServiceClient",
    "ServiceClientFactory",
    "TwilioServiceClient",
    "create_service_client_factory",
]
