import pytest
from unittest.mock import AsyncMock, Mock

from palm_api import PaLM
from palm_api.fake import FakeTransport
from tests.fixtures.responses import ERROR_RESPONSE


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
def fake_transport():
    """Echoing fake transport that records requests."""
    return FakeTransport()


@pytest.fixture
def client(fake_transport):
    """PaLM client wired to the fake transport."""
    return PaLM("test-key", transport=fake_transport)


@pytest.fixture
def make_client():
    """Build a client whose transport always answers with `data`."""

    def _make(data, status=200):
        transport = FakeTransport.returning(data, status=status)
        return PaLM("test-key", transport=transport), transport

    return _make


@pytest.fixture
def failing_transport():
    """AsyncMock transport answering every call with a 400 error body."""
    response = Mock()
    response.ok = False
    response.status = 400
    response.json = AsyncMock(return_value=ERROR_RESPONSE)
    return AsyncMock(return_value=response)
