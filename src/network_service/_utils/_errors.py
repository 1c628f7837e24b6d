import json
from contextlib import contextmanager
from typing import Generator

import httpx
from pydantic import ValidationError

from .._services._transport import TransportError, TransportErrorCode
from ..models.errors import (
    DecodingError,
    NetworkError,
    NoInternetError,
    UnknownError,
)

_DECODING_ERRORS = (ValidationError, json.JSONDecodeError, UnicodeDecodeError)


def map_error(error: Exception) -> NetworkError:
    """Translate an exception raised while executing a request into a `NetworkError`."""
    if isinstance(error, NetworkError):
        return error
    if isinstance(error, TransportError):
        if error.code is TransportErrorCode.NOT_CONNECTED:
            return NoInternetError()
        return UnknownError(error.message)
    if isinstance(error, httpx.ConnectError):
        return NoInternetError()
    if isinstance(error, _DECODING_ERRORS):
        return DecodingError()
    return UnknownError(str(error) or type(error).__name__)


@contextmanager
def handle_errors() -> Generator[None, None, None]:
    """Context manager that re-raises every failure as a `NetworkError`.

    The original exception is kept as the cause of the raised error.

    Raises:
        NetworkError: The mapped error.
    """
    try:
        yield
    except NetworkError:
        raise
    except Exception as e:
        raise map_error(e) from e
