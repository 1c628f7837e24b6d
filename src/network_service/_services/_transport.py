from dataclasses import dataclass, field
from enum import Enum
from logging import getLogger
from typing import Optional, Protocol, runtime_checkable

from httpx import (
    AsyncClient,
    Client,
    ConnectError,
    HTTPError,
    Request,
    Response,
    Timeout,
    TimeoutException,
)

from .._config import Config
from .._utils._ssl_context import get_httpx_client_kwargs


@dataclass(frozen=True)
class ResponseMetadata:
    """Metadata of a response that did not come from an HTTP exchange."""

    url: str = ""


@dataclass(frozen=True)
class HTTPResponseMetadata(ResponseMetadata):
    """Metadata of an HTTP response."""

    status_code: int = 0
    headers: dict[str, str] = field(default_factory=dict)


class TransportErrorCode(str, Enum):
    NOT_CONNECTED = "not_connected"
    TIMED_OUT = "timed_out"
    UNKNOWN = "unknown"


class TransportError(Exception):
    """Raised by a transport when a request could not be exchanged."""

    def __init__(
        self, message: str, code: TransportErrorCode = TransportErrorCode.UNKNOWN
    ) -> None:
        self.message = message
        self.code = code
        super().__init__(self.message)


TransportResult = tuple[Optional[bytes], ResponseMetadata]


@runtime_checkable
class Transport(Protocol):
    """The HTTP capability a `NetworkService` executes requests with.

    Implementations must be safe to use from several threads and tasks at
    once. Failures are raised as `TransportError`.
    """

    def send(self, request: Request) -> TransportResult:
        """Send `request` and block until the body is read."""
        ...

    async def send_async(self, request: Request) -> TransportResult:
        """Send `request` without blocking the event loop."""
        ...


def _metadata(response: Response) -> HTTPResponseMetadata:
    return HTTPResponseMetadata(
        url=str(response.request.url),
        status_code=response.status_code,
        headers=dict(response.headers),
    )


def _transport_error(error: HTTPError) -> TransportError:
    if isinstance(error, ConnectError):
        code = TransportErrorCode.NOT_CONNECTED
    elif isinstance(error, TimeoutException):
        code = TransportErrorCode.TIMED_OUT
    else:
        code = TransportErrorCode.UNKNOWN
    return TransportError(str(error) or type(error).__name__, code)


class HttpxTransport:
    """Default transport backed by `httpx.Client` and `httpx.AsyncClient`."""

    def __init__(self, config: Optional[Config] = None) -> None:
        self._logger = getLogger("network_service")
        self._config = config or Config()

        client_kwargs = get_httpx_client_kwargs(self._config)
        self._timeout = Timeout(self._config.timeout)

        self._client = Client(**client_kwargs)
        self._client_async = AsyncClient(**client_kwargs)

    def send(self, request: Request) -> TransportResult:
        request.extensions.setdefault("timeout", self._timeout.as_dict())
        try:
            response = self._client.send(request)
        except HTTPError as e:
            raise _transport_error(e) from e

        self._logger.debug(f"Response: {response.status_code} {request.url}")
        return response.content, _metadata(response)

    async def send_async(self, request: Request) -> TransportResult:
        request.extensions.setdefault("timeout", self._timeout.as_dict())
        try:
            response = await self._client_async.send(request)
        except HTTPError as e:
            raise _transport_error(e) from e

        self._logger.debug(f"Response: {response.status_code} {request.url}")
        return response.content, _metadata(response)

    def close(self) -> None:
        self._client.close()

    async def aclose(self) -> None:
        await self._client_async.aclose()
        self._client.close()
