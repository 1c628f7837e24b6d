import sys
from pathlib import Path
from typing import Generator

import pytest

# Ensure local source package (src/network_service) is importable before tests collect
_PROJECT_ROOT: Path = Path(__file__).resolve().parents[1]
_SRC_PATH: Path = _PROJECT_ROOT / "src"
if _SRC_PATH.exists():
    sys.path.insert(0, str(_SRC_PATH))

from network_service import Config, NetworkRequest, NetworkService  # noqa: E402
from tests.utils.fake_transport import FakeTransport, TestData  # noqa: E402


@pytest.fixture
def anyio_backend() -> str:
    return "asyncio"


@pytest.fixture
def transport() -> FakeTransport:
    """Provide a fresh scripted transport for each test."""
    return FakeTransport()


@pytest.fixture
def config() -> Config:
    return Config()


@pytest.fixture
def service(
    transport: FakeTransport, config: Config
) -> Generator[NetworkService, None, None]:
    service = NetworkService(transport=transport, config=config)
    yield service
    service.close()


@pytest.fixture
def base_url() -> str:
    return "https://example.com"


@pytest.fixture
def network_request(base_url: str) -> NetworkRequest[TestData]:
    return NetworkRequest(TestData, url=base_url)


@pytest.fixture
def data() -> bytes:
    return b'{"data":"Test data"}'
