"""Health Probe — /_healthcheck reports adapter readiness.

Invariants:
    - Returns 200 when the storage adapter answers its health check
    - Returns 503 when storage is unreachable (removes the instance from the load balancer)
"""

import logging

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from pageviews.api.dependencies import get_publisher, get_storage
from pageviews.api.routes import ALL_METHODS, AnyMethodRoute
from pageviews.core.storage_protocols import StorageAdapter
from pageviews.services.realtime_publisher import RealtimePublisher

logger = logging.getLogger(__name__)
router = APIRouter(tags=["health"], route_class=AnyMethodRoute)


@router.api_route("/_healthcheck", methods=ALL_METHODS)
async def health_check(
    storage: StorageAdapter = Depends(get_storage),
    publisher: RealtimePublisher | None = Depends(get_publisher),
):
    """Readiness probe, including storage connectivity."""
    if not await storage.health_check():
        logger.warning(
            "Health check failed", extra={"adapter": storage.name},
        )
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={
                "status": "not_ready",
                "reason": "storage_unavailable",
            },
        )
    return {
        "status": "healthy",
        "adapter": storage.name,
        "realtime": publisher is not None,
    }
