from .errors import (
    DecodingError,
    EncodingError,
    InvalidRequest,
    NetworkError,
    NoInternetError,
    ServerError,
    UnknownError,
)

__all__ = [
    "NetworkError",
    "InvalidRequest",
    "EncodingError",
    "DecodingError",
    "ServerError",
    "NoInternetError",
    "UnknownError",
]
