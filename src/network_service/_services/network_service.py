import asyncio
from concurrent.futures import Executor, ThreadPoolExecutor
from functools import partial
from typing import Any, Optional, Protocol, TypeVar

from httpx import Request
from tenacity import (
    RetryCallState,
    Retrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_none,
)

from .._config import Config
from .._utils._decoding import decode_response
from .._utils._errors import handle_errors
from .._utils._request_spec import NetworkRequestProtocol
from ._base_service import BaseService
from ._response_stream import DeliveryContext, ResponseStream
from ._transport import Transport

T = TypeVar("T")


class NetworkServiceProtocol(Protocol):
    """The two ways a request can be executed."""

    def perform(
        self,
        request: NetworkRequestProtocol[T],
        *,
        deliver_on: Optional[DeliveryContext] = None,
    ) -> ResponseStream[T]:
        """Execute `request` and deliver its outcome through a `ResponseStream`."""
        ...

    async def perform_async(self, request: NetworkRequestProtocol[T]) -> T:
        """Execute `request` and return the decoded response."""
        ...


class NetworkService(BaseService):
    """Executes request descriptors against a transport.

    Every failure, whatever stage it happens in, reaches the caller as one
    `NetworkError` subclass. The two paths differ on purpose: the stream path
    retries the transport call once and decodes keys as they are, the await
    path sends once and converts keys to snake_case. Both are configurable
    through `Config`.

    Examples:
        ```python
        from network_service import NetworkRequest, NetworkService

        with NetworkService() as service:
            todo = service.perform(NetworkRequest(Todo, url=url)).result()

        async with NetworkService() as service:
            todo = await service.perform_async(NetworkRequest(Todo, url=url))
        ```
    """

    def __init__(
        self,
        transport: Optional[Transport] = None,
        config: Optional[Config] = None,
        *,
        executor: Optional[Executor] = None,
    ) -> None:
        super().__init__(transport=transport, config=config)

        self._owns_executor = executor is None
        self._executor: Executor = executor or ThreadPoolExecutor(
            max_workers=self._config.max_workers,
            thread_name_prefix="network-service",
        )

    def perform(
        self,
        request: NetworkRequestProtocol[T],
        *,
        deliver_on: Optional[DeliveryContext] = None,
    ) -> ResponseStream[T]:
        """Execute `request` and deliver its outcome through a `ResponseStream`.

        The request is only sent once the stream is subscribed to. A failed
        transport call or a non-successful status is retried
        `Config.stream_retry_count` times; decoding failures are not.

        Args:
            request: The request descriptor.
            deliver_on: The execution context callbacks run on. Defaults to the
                context of the subscriber.

        Returns:
            ResponseStream[T]: Stream ending with the decoded response or a
                `NetworkError`.
        """
        return ResponseStream(
            partial(self._execute, request), self._executor, deliver_on
        )

    async def perform_async(self, request: NetworkRequestProtocol[T]) -> T:
        """Execute `request` and return the decoded response.

        The request is sent exactly once.

        Raises:
            NetworkError: The kind of failure that ended the request.
        """
        with handle_errors():
            http_request = self.build_request(request)
            body = await self._send_async(http_request)
            return decode_response(
                body, request.response_type, self._config.async_key_strategy
            )

    def _execute(self, request: NetworkRequestProtocol[T]) -> T:
        with handle_errors():
            http_request = self.build_request(request)
            retrying = Retrying(
                retry=retry_if_exception_type(Exception),
                stop=stop_after_attempt(self._config.stream_retry_count + 1),
                wait=wait_none(),
                before_sleep=self._log_retry,
                reraise=True,
            )
            body = retrying(self._send, http_request)
            return decode_response(
                body, request.response_type, self._config.stream_key_strategy
            )

    def _send(self, request: Request) -> Optional[bytes]:
        self._logger.debug(f"Request: {request.method} {request.url}")
        self._logger.debug(f"HEADERS: {request.headers}")

        body, metadata = self._transport.send(request)
        self.validate_status(metadata)

        return body

    async def _send_async(self, request: Request) -> Optional[bytes]:
        self._logger.debug(f"Request: {request.method} {request.url}")
        self._logger.debug(f"HEADERS: {request.headers}")

        body, metadata = await self._transport.send_async(request)
        self.validate_status(metadata)

        return body

    def _log_retry(self, retry_state: RetryCallState) -> None:
        error = retry_state.outcome.exception() if retry_state.outcome else None
        self._logger.warning(
            f"Request failed ({error!r}). "
            f"Retry {retry_state.attempt_number}/{self._config.stream_retry_count}"
        )

    def close(self) -> None:
        if self._owns_executor:
            self._executor.shutdown(wait=True)
        super().close()

    async def aclose(self) -> None:
        if self._owns_executor:
            await asyncio.to_thread(self._executor.shutdown)
        await super().aclose()

    def __enter__(self) -> "NetworkService":
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

    async def __aenter__(self) -> "NetworkService":
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.aclose()
