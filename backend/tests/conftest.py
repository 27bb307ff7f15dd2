"""Root conftest — shared storage fixtures.

Invariants:
    - Tests never touch a real database file: SQL runs on in-memory SQLite
    - Every test gets fresh adapters (no state leaks between tests)

Design Decisions:
    - SQLite in-memory: fast, no external dependency, sufficient for adapter tests
    - `storage` fixture parametrized over both adapters so contract tests run twice
"""

import os

import pytest
from sqlalchemy.ext.asyncio import create_async_engine

# Ensure settings never point at a real database during tests
os.environ.setdefault("ADAPTER", "memory")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("LOG_FORMAT", "text")

from pageviews.db.base import Base  # noqa: E402
from pageviews.infrastructure.database import DatabaseSessionManager  # noqa: E402
from pageviews.infrastructure.memory_adapter import InMemoryStorageAdapter  # noqa: E402
from pageviews.infrastructure.sql_adapter import SqlStorageAdapter  # noqa: E402


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def memory_storage():
    return InMemoryStorageAdapter()


@pytest.fixture
async def sql_storage(test_engine):
    return SqlStorageAdapter(DatabaseSessionManager.from_engine(test_engine))


@pytest.fixture(params=["memory", "sql"])
async def storage(request, memory_storage, test_engine):
    """Each adapter in turn: contract tests must pass on both."""
    if request.param == "memory":
        return memory_storage
    return SqlStorageAdapter(DatabaseSessionManager.from_engine(test_engine))
