"""Realtime Route — SSE subscription to newly recorded views.

Invariants:
    - Without a publisher (adapter lacks "subscribe") every request gets 400
      {"error": "The current database adapter does not support live updates."}
    - Any origin may subscribe (Access-Control-Allow-Origin: *)
    - Subscriber is registered when the stream starts and removed when it ends

Design Decisions:
    - StreamingResponse + async generator, same SSE wiring as the other stream routes
    - Last-Event-ID header honoured so reconnecting clients replay missed views
"""

import asyncio
import logging

from fastapi import APIRouter, Depends, Request
from fastapi.responses import StreamingResponse

from pageviews.api.dependencies import get_publisher
from pageviews.api.routes import ALL_METHODS, CORS_HEADERS, AnyMethodRoute
from pageviews.core.errors import LiveUpdatesUnsupportedError
from pageviews.services.realtime_publisher import RealtimePublisher

logger = logging.getLogger(__name__)
router = APIRouter(tags=["realtime"], route_class=AnyMethodRoute)

# ADR: SSE headers prevent proxy/browser buffering of streamed events.
SSE_HEADERS = {
    **CORS_HEADERS,
    "Cache-Control": "no-cache",
    "X-Accel-Buffering": "no",
    "Connection": "keep-alive",
}


@router.api_route("/_realtime", methods=ALL_METHODS)
async def subscribe(
    request: Request,
    publisher: RealtimePublisher | None = Depends(get_publisher),
):
    """Open a live stream of recorded views."""
    if publisher is None:
        raise LiveUpdatesUnsupportedError(headers=CORS_HEADERS)
    last_event_id = request.headers.get("last-event-id")

    async def event_generator():
        subscriber = publisher.add_client(last_event_id)
        try:
            async for frame in publisher.stream(subscriber):
                yield frame
        except asyncio.CancelledError:
            logger.info("Client disconnected from realtime stream")
            return

    return StreamingResponse(
        event_generator(),
        media_type="text/event-stream",
        headers=SSE_HEADERS,
    )
