import asyncio
import threading
from concurrent.futures import Executor, Future
from logging import getLogger
from typing import Any, Callable, Generic, Optional, TypeVar

from .._utils._errors import map_error
from ..models.errors import NetworkError

T = TypeVar("T")

DeliveryContext = Callable[[Callable[[], None]], Any]
"""Schedules a callback on the execution context results are delivered on."""


def immediate(callback: Callable[[], None]) -> None:
    """Deliver on whichever thread completed the request."""
    callback()


def event_loop_context(loop: asyncio.AbstractEventLoop) -> DeliveryContext:
    """Deliver on the thread running `loop`."""
    return loop.call_soon_threadsafe


def caller_context() -> DeliveryContext:
    """The execution context of the current caller.

    Inside a running event loop results are delivered on that loop, anywhere
    else they are delivered inline.
    """
    try:
        loop = asyncio.get_running_loop()
    except RuntimeError:
        return immediate
    return event_loop_context(loop)


class Subscription:
    """Handle returned by `ResponseStream.subscribe`."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._cancelled = False
        self._finished = False
        self._future: Optional[Future[Any]] = None

    @property
    def is_active(self) -> bool:
        with self._lock:
            return not (self._cancelled or self._finished)

    def cancel(self) -> None:
        """Stop delivery. A request that has not started yet is never sent."""
        with self._lock:
            if self._finished:
                return
            self._cancelled = True
            future = self._future
        if future is not None:
            future.cancel()

    def _attach(self, future: "Future[Any]") -> None:
        with self._lock:
            self._future = future
            cancelled = self._cancelled
        if cancelled:
            future.cancel()

    def _claim(self) -> bool:
        # Exactly one terminal event per subscription.
        with self._lock:
            if self._cancelled or self._finished:
                return False
            self._finished = True
            return True


class ResponseStream(Generic[T]):
    """A cold stream that ends with one value or one `NetworkError`.

    Nothing is sent until `subscribe` (or `result`) is called, and every
    subscription executes the request on its own.

    Examples:
        ```python
        stream = service.perform(request)

        subscription = stream.subscribe(
            lambda todo: print(todo.title),
            lambda error: print(error.message),
        )

        # or block until the request completes
        todo = stream.result(timeout=10)
        ```
    """

    def __init__(
        self,
        source: Callable[[], T],
        executor: Executor,
        deliver_on: Optional[DeliveryContext] = None,
    ) -> None:
        self._logger = getLogger("network_service")
        self._source = source
        self._executor = executor
        self._deliver_on = deliver_on

    def subscribe(
        self,
        on_value: Callable[[T], Any],
        on_error: Callable[[NetworkError], Any],
        *,
        deliver_on: Optional[DeliveryContext] = None,
    ) -> Subscription:
        """Start the request and deliver its outcome to one of the callbacks.

        Args:
            on_value: Called with the decoded response on success.
            on_error: Called with the `NetworkError` on failure.
            deliver_on: Where callbacks run. Defaults to the context given to
                `NetworkService.perform`, else the caller's context.

        Returns:
            Subscription: Handle to cancel delivery.
        """
        context = deliver_on or self._deliver_on or caller_context()
        subscription = Subscription()

        def deliver(future: "Future[T]") -> None:
            if future.cancelled():
                return

            error = future.exception()
            callback: Callable[[Any], Any]
            if error is None:
                callback, payload = on_value, future.result()
            elif isinstance(error, Exception):
                callback, payload = on_error, map_error(error)
            else:
                raise error

            def emit() -> None:
                if subscription._claim():
                    callback(payload)

            try:
                context(emit)
            except RuntimeError:
                # the delivery loop is closed, nobody is left to notify
                self._logger.debug("Dropping result, delivery context is closed")

        future = self._executor.submit(self._source)
        subscription._attach(future)
        future.add_done_callback(deliver)
        return subscription

    def result(self, timeout: Optional[float] = None) -> T:
        """Block until the request completes.

        Returns:
            T: The decoded response.

        Raises:
            NetworkError: If the request failed.
            TimeoutError: If `timeout` seconds pass without a result. Delivery
                is cancelled in that case.
        """
        done = threading.Event()
        outcome: dict[str, Any] = {}

        def on_value(value: T) -> None:
            outcome["value"] = value
            done.set()

        def on_error(error: NetworkError) -> None:
            outcome["error"] = error
            done.set()

        subscription = self.subscribe(on_value, on_error, deliver_on=immediate)
        if not done.wait(timeout):
            subscription.cancel()
            raise TimeoutError(f"No response within {timeout} seconds")

        if "error" in outcome:
            raise outcome["error"]
        return outcome["value"]
