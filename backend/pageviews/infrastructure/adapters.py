"""Adapter Selection — maps the configured adapter name to a ready-to-use StorageAdapter.

Invariants:
    - Selection happens once, at startup (lifespan), never per request
    - Unknown names fail fast with UnknownAdapterError
    - Returned adapters are initialized (schema created for SQL)

Design Decisions:
    - Explicit dict registry over entry-point discovery (ADR: ExMA no auto-discovery)
"""

import logging
from typing import Awaitable, Callable

from pageviews.config import Settings
from pageviews.core.errors import UnknownAdapterError
from pageviews.core.storage_protocols import StorageAdapter
from pageviews.infrastructure.database import DatabaseSessionManager
from pageviews.infrastructure.memory_adapter import InMemoryStorageAdapter
from pageviews.infrastructure.sql_adapter import SqlStorageAdapter

logger = logging.getLogger(__name__)


async def _build_memory(settings: Settings) -> StorageAdapter:
    return InMemoryStorageAdapter()


async def _build_sql(settings: Settings) -> StorageAdapter:
    db = DatabaseSessionManager(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
    )
    adapter = SqlStorageAdapter(db)
    await adapter.init()
    return adapter


ADAPTER_BUILDERS: dict[str, Callable[[Settings], Awaitable[StorageAdapter]]] = {
    "memory": _build_memory,
    "sql": _build_sql,
}


async def create_storage_adapter(settings: Settings) -> StorageAdapter:
    """Build the adapter named by settings.adapter."""
    builder = ADAPTER_BUILDERS.get(settings.adapter)
    if builder is None:
        raise UnknownAdapterError(settings.adapter, sorted(ADAPTER_BUILDERS))
    adapter = await builder(settings)
    logger.info(
        "Storage adapter ready: %s", adapter.name,
        extra={"adapter": adapter.name},
    )
    return adapter
