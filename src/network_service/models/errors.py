from typing import Any


class NetworkError(Exception):
    """Base class of the closed set of errors a request can end with.

    Every failure detected while executing a request is translated into exactly
    one of the subclasses below before it reaches the caller. Errors compare
    equal when they are of the same kind and carry the same payload, so tests
    and callers can match on them directly:

        ```python
        try:
            await service.perform_async(request)
        except NetworkError as e:
            if e == ServerError(404):
                ...
        ```
    """

    def __init__(self, *payload: Any) -> None:
        super().__init__(*payload)

    @property
    def message(self) -> str:
        raise NotImplementedError

    def __str__(self) -> str:
        return self.message

    def __repr__(self) -> str:
        payload = ", ".join(repr(arg) for arg in self.args)
        return f"{type(self).__name__}({payload})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, NetworkError):
            return NotImplemented
        return type(self) is type(other) and self.args == other.args

    def __hash__(self) -> int:
        return hash((type(self), self.args))


class InvalidRequest(NetworkError):
    """The request has no usable URL."""

    @property
    def message(self) -> str:
        return "Invalid request"


class EncodingError(NetworkError):
    """The request body parameters could not be serialized to JSON."""

    @property
    def message(self) -> str:
        return "Failed to encode request parameters"


class DecodingError(NetworkError):
    """The response body could not be decoded into the response type."""

    @property
    def message(self) -> str:
        return "Failed to decode server response"


class ServerError(NetworkError):
    """The server answered with a status code outside of [200, 300)."""

    def __init__(self, status_code: int = 500) -> None:
        super().__init__(status_code)

    @property
    def status_code(self) -> int:
        return self.args[0]

    @property
    def message(self) -> str:
        return f"Server error with status code: {self.status_code}"


class NoInternetError(NetworkError):
    """The transport reported that the host is not connected to a network."""

    @property
    def message(self) -> str:
        return "Failed to connect due to the network"


class UnknownError(NetworkError):
    """Any failure that does not match one of the other kinds."""

    def __init__(self, description: str) -> None:
        super().__init__(description)

    @property
    def description(self) -> str:
        return self.args[0]

    @property
    def message(self) -> str:
        return f'Unknown Error: "{self.description}"'
