from ._response_stream import (
    DeliveryContext,
    ResponseStream,
    Subscription,
    caller_context,
    event_loop_context,
    immediate,
)
from ._transport import (
    HTTPResponseMetadata,
    HttpxTransport,
    ResponseMetadata,
    Transport,
    TransportError,
    TransportErrorCode,
)
from .network_service import NetworkService, NetworkServiceProtocol

__all__ = [
    "NetworkService",
    "NetworkServiceProtocol",
    "ResponseStream",
    "Subscription",
    "DeliveryContext",
    "caller_context",
    "event_loop_context",
    "immediate",
    "Transport",
    "HttpxTransport",
    "TransportError",
    "TransportErrorCode",
    "ResponseMetadata",
    "HTTPResponseMetadata",
]
