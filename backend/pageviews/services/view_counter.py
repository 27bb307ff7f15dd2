"""View Counter — count, record and export page views through a storage adapter.

Invariants:
    - current_count() reads before any append: an incrementing hit reports count + 1
    - record_view() publishes only after push_view() succeeded
    - No state kept between calls; the adapter is the authority on counts

Design Decisions:
    - Concurrent increments to one page may both observe the same pre-append
      count; accepted because adapters expose no atomic increment-and-return
    - Publisher is optional and injected: None means realtime is disabled
"""

import logging

from pageviews.core.domain_types import PageViews, TimeWindow, View, ViewEvent, now_ms
from pageviews.core.storage_protocols import StorageAdapter, ViewPublisher

logger = logging.getLogger(__name__)


class ViewCounter:
    """Thin orchestration over StorageAdapter + optional ViewPublisher."""

    def __init__(
        self, storage: StorageAdapter, publisher: ViewPublisher | None = None,
    ):
        self._storage = storage
        self._publisher = publisher

    async def export(self, pathname: str, window: TimeWindow) -> list[PageViews]:
        return await self._storage.get_all(pathname, window)

    async def current_count(self, pathname: str, window: TimeWindow) -> int:
        if not await self._storage.has(pathname):
            return 0
        page = await self._storage.get(pathname, window)
        return page.count

    async def record_view(
        self, pathname: str, meta=None, timestamp: int | None = None,
    ) -> View:
        """Append a view and fan it out to realtime subscribers."""
        view = View(
            timestamp=now_ms() if timestamp is None else timestamp, meta=meta,
        )
        await self._storage.push_view(pathname, view)
        if self._publisher is not None:
            delivered = self._publisher.publish(ViewEvent(pathname, view))
            logger.debug(
                "Published view to %d subscriber(s)", delivered,
                extra={"pathname": pathname},
            )
        return view
