"""API test fixtures — FastAPI test clients with storage/publisher overridden.

Invariants:
    - Lifespan is not run by ASGITransport: get_storage/get_publisher are
      overridden so every test picks its own adapter
    - `client` runs against both adapters; realtime is only wired for memory
    - dependency_overrides cleared after each test

Design Decisions:
    - RecordingStorage counts adapter calls so tests can prove a request
      never reached storage
"""

import pytest
from httpx import ASGITransport, AsyncClient

from pageviews.api.dependencies import get_publisher, get_storage
from pageviews.infrastructure.memory_adapter import InMemoryStorageAdapter
from pageviews.main import app
from pageviews.services.realtime_publisher import RealtimePublisher


class RecordingStorage(InMemoryStorageAdapter):
    """Memory adapter that logs every IO call by name."""

    def __init__(self):
        super().__init__()
        self.calls: list[str] = []

    async def has(self, pathname):
        self.calls.append("has")
        return await super().has(pathname)

    async def get(self, pathname, window):
        self.calls.append("get")
        return await super().get(pathname, window)

    async def get_all(self, pathname, window):
        self.calls.append("get_all")
        return await super().get_all(pathname, window)

    async def push_view(self, pathname, view):
        self.calls.append("push_view")
        await super().push_view(pathname, view)


class FailingStorage(InMemoryStorageAdapter):
    """Every IO call fails with an internal-looking message."""
    features = frozenset()

    async def has(self, pathname):
        raise RuntimeError("connection refused on 10.0.0.7")

    async def get_all(self, pathname, window):
        raise RuntimeError("connection refused on 10.0.0.7")

    async def health_check(self):
        return False


def _client_for(storage, publisher=None):
    app.dependency_overrides[get_storage] = lambda: storage
    app.dependency_overrides[get_publisher] = lambda: publisher
    return AsyncClient(transport=ASGITransport(app=app), base_url="http://test")


@pytest.fixture
def publisher():
    return RealtimePublisher(queue_size=50, history_size=50, ping_interval=5.0)


@pytest.fixture
async def client(storage, publisher):
    """Client over each adapter; publisher wired only if the adapter supports it."""
    wired = publisher if storage.has_feature("subscribe") else None
    async with _client_for(storage, wired) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
async def memory_client(memory_storage, publisher):
    async with _client_for(memory_storage, publisher) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
async def sql_client(sql_storage):
    async with _client_for(sql_storage) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def recording_storage():
    return RecordingStorage()


@pytest.fixture
async def recording_client(recording_storage):
    async with _client_for(recording_storage) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
async def failing_client():
    async with _client_for(FailingStorage()) as c:
        yield c
    app.dependency_overrides.clear()
