"""Declarative HTTP request execution with a closed error taxonomy.

Describe a call with a `NetworkRequest` (or any object matching
`NetworkRequestProtocol`) and execute it with a `NetworkService`, either
through a single-value `ResponseStream` or by awaiting `perform_async`.
"""

from ._config import Config
from ._services import (
    DeliveryContext,
    HTTPResponseMetadata,
    HttpxTransport,
    NetworkService,
    NetworkServiceProtocol,
    ResponseMetadata,
    ResponseStream,
    Subscription,
    Transport,
    TransportError,
    TransportErrorCode,
    caller_context,
    event_loop_context,
    immediate,
)
from ._utils import (
    HttpMethod,
    KeyDecodingStrategy,
    NetworkRequest,
    NetworkRequestProtocol,
)
from .models import (
    DecodingError,
    EncodingError,
    InvalidRequest,
    NetworkError,
    NoInternetError,
    ServerError,
    UnknownError,
)

__all__ = [
    "Config",
    "NetworkService",
    "NetworkServiceProtocol",
    "NetworkRequest",
    "NetworkRequestProtocol",
    "HttpMethod",
    "KeyDecodingStrategy",
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
    "NetworkError",
    "InvalidRequest",
    "EncodingError",
    "DecodingError",
    "ServerError",
    "NoInternetError",
    "UnknownError",
]
