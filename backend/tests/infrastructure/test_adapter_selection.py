"""Adapter Selection & Settings — configuration picks and prepares the adapter.

Tests:
    - "memory" and "sql" build working adapters
    - unknown adapter names fail fast
    - settings normalize adapter names and rewrite postgresql:// URLs
"""

import pytest

from pageviews.config import Settings
from pageviews.core.domain_types import TimeWindow, View
from pageviews.core.errors import UnknownAdapterError
from pageviews.infrastructure.adapters import create_storage_adapter
from pageviews.infrastructure.memory_adapter import InMemoryStorageAdapter
from pageviews.infrastructure.sql_adapter import SqlStorageAdapter

SQLITE_MEMORY = "sqlite+aiosqlite:///:memory:"


async def test_memory_adapter_selected():
    adapter = await create_storage_adapter(Settings(adapter="memory"))
    assert isinstance(adapter, InMemoryStorageAdapter)


async def test_sql_adapter_selected_with_schema():
    adapter = await create_storage_adapter(
        Settings(adapter="sql", database_url=SQLITE_MEMORY),
    )
    try:
        assert isinstance(adapter, SqlStorageAdapter)
        await adapter.push_view("/a", View(1))
        page = await adapter.get("/a", TimeWindow())
        assert page.count == 1
    finally:
        await adapter.close()


async def test_unknown_adapter_rejected():
    with pytest.raises(UnknownAdapterError):
        await create_storage_adapter(Settings(adapter="redis"))


def test_adapter_name_normalized():
    assert Settings(adapter="  Memory ").adapter == "memory"


def test_postgres_url_rewritten_for_asyncpg():
    settings = Settings(database_url="postgresql://u:p@db:5432/views")
    assert settings.database_url == "postgresql+asyncpg://u:p@db:5432/views"


def test_sqlite_url_untouched():
    assert Settings(database_url=SQLITE_MEMORY).database_url == SQLITE_MEMORY
