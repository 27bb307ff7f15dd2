"""FastAPI Dependencies — expose the startup-built adapter and publisher to routes.

Invariants:
    - Adapter and publisher are created once in the lifespan and stored on app.state
    - get_publisher returns None when the adapter lacks the subscribe capability
    - Tests override these via app.dependency_overrides
"""

from fastapi import Depends, Request

from pageviews.core.storage_protocols import StorageAdapter
from pageviews.services.realtime_publisher import RealtimePublisher
from pageviews.services.view_counter import ViewCounter


def get_storage(request: Request) -> StorageAdapter:
    storage = getattr(request.app.state, "storage", None)
    if storage is None:
        raise RuntimeError("Storage adapter not initialized")
    return storage


def get_publisher(request: Request) -> RealtimePublisher | None:
    return getattr(request.app.state, "publisher", None)


def get_view_counter(
    storage: StorageAdapter = Depends(get_storage),
    publisher: RealtimePublisher | None = Depends(get_publisher),
) -> ViewCounter:
    return ViewCounter(storage, publisher)
