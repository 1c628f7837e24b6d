import json
from typing import Any, Mapping, Optional, Union

from httpx import URL, InvalidURL, Request

from .._config import Config
from .._utils._logs import setup_logging
from .._utils._request_spec import HttpMethod, NetworkRequestProtocol
from ..models.errors import EncodingError, InvalidRequest, ServerError
from ._transport import (
    HTTPResponseMetadata,
    HttpxTransport,
    ResponseMetadata,
    Transport,
)

CONTENT_TYPE_JSON = "application/json"
SUPPORTED_SCHEMES = ("http", "https")


def is_success_status_code(status_code: int) -> bool:
    return 200 <= status_code < 300


class BaseService:
    """Holds the request pipeline shared by every execution path.

    Building a request never touches the network: a request that cannot be
    addressed or encoded fails here and the transport is not called.
    """

    def __init__(
        self,
        transport: Optional[Transport] = None,
        config: Optional[Config] = None,
    ) -> None:
        self._config = config or Config()
        self._logger = setup_logging(self._config.debug)

        self._owns_transport = transport is None
        self._transport: Transport = (
            transport if transport is not None else HttpxTransport(self._config)
        )

        self._logger.debug(f"CONFIG: {self._config.model_dump()}")

        super().__init__()

    @property
    def config(self) -> Config:
        return self._config

    def build_request(self, request: NetworkRequestProtocol[Any]) -> Request:
        """Materialize the HTTP request described by `request`.

        Raises:
            InvalidRequest: If the URL is absent, unparseable or not absolute.
            EncodingError: If the body parameters are not JSON serializable.
        """
        url = self._resolve_url(request.url, request.query_params)

        headers: list[tuple[str, str]] = [("Content-Type", CONTENT_TYPE_JSON)]
        if request.headers:
            headers.extend(request.headers.items())

        content = self._encode_body(request.body_params)

        return Request(
            self._method(request.method), url, headers=headers, content=content
        )

    def validate_status(self, metadata: ResponseMetadata) -> None:
        """Raise `ServerError` unless `metadata` is a successful HTTP response."""
        if not isinstance(metadata, HTTPResponseMetadata):
            raise ServerError(500)
        if not is_success_status_code(metadata.status_code):
            raise ServerError(metadata.status_code)

    def _resolve_url(
        self, raw_url: Optional[str], query_params: Optional[Mapping[str, str]]
    ) -> URL:
        if not raw_url:
            raise InvalidRequest()

        try:
            url = URL(raw_url)
            if query_params:
                url = url.copy_merge_params(list(query_params.items()))
        except (InvalidURL, TypeError, ValueError) as e:
            raise InvalidRequest() from e

        if url.scheme not in SUPPORTED_SCHEMES or not url.host:
            raise InvalidRequest()

        return url

    def _encode_body(self, body_params: Optional[Mapping[str, Any]]) -> Optional[bytes]:
        if body_params is None:
            return None

        try:
            return json.dumps(dict(body_params), allow_nan=False).encode("utf-8")
        except (TypeError, ValueError) as e:
            raise EncodingError() from e

    @staticmethod
    def _method(method: Union[HttpMethod, str]) -> str:
        if isinstance(method, HttpMethod):
            return method.value
        return str(method).upper()

    def close(self) -> None:
        if self._owns_transport and isinstance(self._transport, HttpxTransport):
            self._transport.close()

    async def aclose(self) -> None:
        if self._owns_transport and isinstance(self._transport, HttpxTransport):
            await self._transport.aclose()
