import sys
from pathlib import Path
from typing import Callable, List

import httpx
import pytest

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))


def pytest_configure(config):
    # Register the asyncio marker so pytest doesn't warn when it's used.
    config.addinivalue_line(
        "markers", "asyncio: mark test to run in an asyncio event loop"
    )
    # Add custom markers for test organization
    config.addinivalue_line(
        "markers", "unit: mark test as a unit test"
    )


@pytest.fixture(autouse=True)
def mock_env_vars(monkeypatch):
    """Pin the transport environment for tests.

    Clears any ENDPOINT_CLIENT_* variables from the developer's shell so
    Settings sees only what a test sets explicitly.
    """
    for name in [
        "ENDPOINT_CLIENT_HTTP2",
        "ENDPOINT_CLIENT_FOLLOW_REDIRECTS",
        "ENDPOINT_CLIENT_READ_TIMEOUT",
        "ENDPOINT_CLIENT_CONNECT_TIMEOUT",
        "ENDPOINT_CLIENT_USER_AGENT",
    ]:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("ENDPOINT_CLIENT_LOG_LEVEL", "INFO")
    yield


@pytest.fixture
def captured_requests() -> List[httpx.Request]:
    """Requests seen by the stub transport, in order."""
    return []


@pytest.fixture
def stub_client(captured_requests) -> Callable[..., httpx.AsyncClient]:
    """Build an AsyncClient whose transport answers with a fixed response.

    The returned factory takes the status code and body (bytes or str),
    or a handler raising an exception to simulate a transport failure.
    """

    def factory(status_code: int = 200, content=b"", raises=None, **client_kwargs):
        def handler(request: httpx.Request) -> httpx.Response:
            captured_requests.append(request)
            if raises is not None:
                raise raises(request)
            return httpx.Response(status_code, content=content)

        return httpx.AsyncClient(transport=httpx.MockTransport(handler), **client_kwargs)

    return factory
