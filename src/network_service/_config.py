from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from ._utils._decoding import KeyDecodingStrategy


class Config(BaseModel):
    """Settings shared by every request a `NetworkService` executes.

    The stream and await paths intentionally differ in retry count and key
    decoding; both are kept as separate settings so callers can align them.
    """

    model_config = ConfigDict(frozen=True, use_enum_values=False)

    timeout: float = Field(default=30.0, gt=0)
    follow_redirects: bool = True
    stream_retry_count: int = Field(default=1, ge=0)
    stream_key_strategy: KeyDecodingStrategy = KeyDecodingStrategy.USE_DEFAULT_KEYS
    async_key_strategy: KeyDecodingStrategy = (
        KeyDecodingStrategy.CONVERT_TO_SNAKE_CASE
    )
    max_workers: Optional[int] = Field(default=None, gt=0)
    debug: bool = False
