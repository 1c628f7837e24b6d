from ._decoding import KeyDecodingStrategy, decode_response
from ._logs import setup_logging
from ._request_spec import HttpMethod, NetworkRequest, NetworkRequestProtocol

__all__ = [
    "HttpMethod",
    "NetworkRequest",
    "NetworkRequestProtocol",
    "KeyDecodingStrategy",
    "decode_response",
    "setup_logging",
]
