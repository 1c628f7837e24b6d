import json
from enum import Enum
from functools import lru_cache
from typing import Any, Optional

from pydantic import TypeAdapter
from pydantic.alias_generators import to_snake


class KeyDecodingStrategy(str, Enum):
    """How object keys of a response document are matched to the response type."""

    USE_DEFAULT_KEYS = "use_default_keys"
    CONVERT_TO_SNAKE_CASE = "convert_to_snake_case"


@lru_cache(maxsize=256)
def _type_adapter(response_type: Any) -> TypeAdapter[Any]:
    return TypeAdapter(response_type)


def _convert_keys(value: Any) -> Any:
    if isinstance(value, dict):
        return {to_snake(key): _convert_keys(item) for key, item in value.items()}
    if isinstance(value, list):
        return [_convert_keys(item) for item in value]
    return value


def decode_response(
    body: Optional[bytes],
    response_type: Any,
    strategy: KeyDecodingStrategy = KeyDecodingStrategy.USE_DEFAULT_KEYS,
) -> Any:
    """Decode a JSON response body into `response_type`.

    Args:
        body: The raw response body. `None` is treated as an empty body.
        response_type: Any type pydantic can validate.
        strategy: The key decoding strategy to apply before validation.

    Returns:
        The validated value.

    Raises:
        pydantic.ValidationError: If the body is empty, not JSON, or does not
            match `response_type`.
        json.JSONDecodeError: If the body is not JSON and keys have to be
            converted before validation.
        UnicodeDecodeError: If the body is not text and keys have to be
            converted before validation.
    """
    adapter = _type_adapter(response_type)
    content = body or b""

    if strategy is KeyDecodingStrategy.CONVERT_TO_SNAKE_CASE:
        return adapter.validate_python(_convert_keys(json.loads(content)))

    return adapter.validate_json(content)
