"""Realtime Publisher — Server-Sent Events fanout of newly appended views.

Invariants:
    - Constructed only when the storage adapter advertises "subscribe"
    - publish() never awaits: request handlers never wait on subscribers
    - Every subscriber has its own bounded queue; events are enqueued in publish() call order
    - A subscriber whose queue is full is dropped without affecting the others
    - Event ids increase monotonically; the last N frames are kept for Last-Event-ID replay

Design Decisions:
    - asyncio.Queue per subscriber over a shared broadcast list: one slow or broken
      connection can only overflow its own queue (ADR: isolation over fairness)
    - Frames are formatted once in publish() and shared by every subscriber
    - Closed subscribers get a None sentinel after their pending frames; an
      overflowed queue is discarded first, and the client reconnects with
      Last-Event-ID to catch up from history
"""

import asyncio
import itertools
import json
import logging
from collections import deque
from dataclasses import dataclass, field
from typing import AsyncIterator

from pageviews.config import Settings
from pageviews.core.domain_types import AdapterFeature, ViewEvent
from pageviews.core.storage_protocols import StorageAdapter

logger = logging.getLogger(__name__)

PING_FRAME = ": ping\n\n"


def format_sse(event_id: int, payload: dict) -> str:
    """Format a payload as an SSE frame with an id line."""
    return f"id: {event_id}\ndata: {json.dumps(payload, ensure_ascii=False)}\n\n"


@dataclass
class Subscriber:
    """One realtime client connection."""
    id: int
    queue: asyncio.Queue = field(repr=False)
    closed: bool = False

    def offer(self, frame: str) -> bool:
        if self.closed:
            return False
        try:
            self.queue.put_nowait(frame)
        except asyncio.QueueFull:
            return False
        return True

    def close(self) -> None:
        """Queue the end sentinel; a full queue is discarded to make room."""
        if self.closed:
            return
        self.closed = True
        try:
            self.queue.put_nowait(None)
        except asyncio.QueueFull:
            while not self.queue.empty():
                self.queue.get_nowait()
            self.queue.put_nowait(None)


class RealtimePublisher:
    """Registry of realtime subscribers plus the fanout loop feeding them."""

    def __init__(
        self,
        queue_size: int = 100,
        history_size: int = 500,
        ping_interval: float = 20.0,
        retry_ms: int = 2000,
    ):
        self._queue_size = queue_size
        self._ping_interval = ping_interval
        self._retry_ms = retry_ms
        self._subscribers: dict[int, Subscriber] = {}
        self._history: deque[tuple[int, str]] = deque(maxlen=history_size)
        self._ids = itertools.count(1)
        self._last_event_id = 0

    @property
    def subscriber_count(self) -> int:
        return len(self._subscribers)

    @property
    def last_event_id(self) -> int:
        return self._last_event_id

    def add_client(self, last_event_id: str | None = None) -> Subscriber:
        """Register a subscriber, replaying missed frames when reconnecting."""
        subscriber = Subscriber(
            id=next(self._ids), queue=asyncio.Queue(maxsize=self._queue_size),
        )
        for frame in self._missed_since(last_event_id):
            subscriber.offer(frame)
        self._subscribers[subscriber.id] = subscriber
        logger.info(
            "Realtime subscriber connected",
            extra={"subscribers": self.subscriber_count},
        )
        return subscriber

    def remove_client(self, subscriber: Subscriber) -> None:
        if self._subscribers.pop(subscriber.id, None) is not None:
            logger.info(
                "Realtime subscriber disconnected",
                extra={"subscribers": self.subscriber_count},
            )
        subscriber.close()

    def publish(self, event: ViewEvent) -> int:
        """Fan one view out to every subscriber. Returns the delivered count."""
        self._last_event_id += 1
        frame = format_sse(self._last_event_id, event.to_dict())
        self._history.append((self._last_event_id, frame))

        delivered = 0
        for subscriber in list(self._subscribers.values()):
            if subscriber.offer(frame):
                delivered += 1
                continue
            logger.warning(
                "Dropping slow realtime subscriber",
                extra={"event_id": self._last_event_id, "pathname": event.pathname},
            )
            self.remove_client(subscriber)
        return delivered

    async def stream(self, subscriber: Subscriber) -> AsyncIterator[str]:
        """Yield SSE frames for one subscriber until it is closed or cancelled."""
        try:
            yield f"retry: {self._retry_ms}\n\n"
            while True:
                try:
                    frame = await asyncio.wait_for(
                        subscriber.queue.get(), timeout=self._ping_interval,
                    )
                except asyncio.TimeoutError:
                    yield PING_FRAME
                    continue
                if frame is None:
                    return
                yield frame
        finally:
            self.remove_client(subscriber)

    def close_all(self) -> None:
        """End every open stream (shutdown)."""
        for subscriber in list(self._subscribers.values()):
            self.remove_client(subscriber)

    def _missed_since(self, last_event_id: str | None) -> list[str]:
        if not last_event_id:
            return []
        try:
            since = int(last_event_id)
        except ValueError:
            return []
        missed = [frame for event_id, frame in self._history if event_id > since]
        return missed[-self._queue_size:]


def create_publisher(
    storage: StorageAdapter, settings: Settings,
) -> RealtimePublisher | None:
    """Build the publisher iff the adapter supports live updates."""
    if not storage.has_feature(AdapterFeature.SUBSCRIBE.value):
        logger.info(
            "Realtime disabled: adapter has no subscribe capability",
            extra={"adapter": storage.name},
        )
        return None
    return RealtimePublisher(
        queue_size=settings.realtime_queue_size,
        history_size=settings.realtime_history_size,
        ping_interval=settings.realtime_ping_interval_seconds,
        retry_ms=settings.realtime_retry_ms,
    )
