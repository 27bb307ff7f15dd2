"""In-Memory Storage Adapter — process-local view sequences with live-update support.

Invariants:
    - Views per page kept in append order (list append is atomic on the event loop)
    - get()/get_all() return copies: callers never alias internal lists
    - Advertises the "subscribe" capability: realtime works with this adapter

Design Decisions:
    - No lock: push_view has no await between read and append, so single-loop
      callers cannot interleave (ADR: asyncio cooperative scheduling)
    - Data lost on restart: intended for development, demos and tests
"""

from pageviews.core.domain_types import (
    AdapterFeature, PageViews, TimeWindow, View, matches_prefix,
)
from pageviews.core.errors import PageNotFoundError


class InMemoryStorageAdapter:
    """Dict-of-lists storage; every page maps to its ordered views."""

    name = "memory"
    features = frozenset({AdapterFeature.SUBSCRIBE.value})

    def __init__(self, initial: dict[str, list[View]] | None = None):
        self._pages: dict[str, list[View]] = {
            path: list(views) for path, views in (initial or {}).items()
        }

    def has_feature(self, name: str) -> bool:
        return name in self.features

    async def has(self, pathname: str) -> bool:
        return pathname in self._pages

    async def get(self, pathname: str, window: TimeWindow) -> PageViews:
        if pathname not in self._pages:
            raise PageNotFoundError(pathname)
        return PageViews(pathname, window.apply(self._pages[pathname]))

    async def get_all(
        self, pathname: str | None, window: TimeWindow,
    ) -> list[PageViews]:
        return [
            PageViews(path, window.apply(views))
            for path, views in sorted(self._pages.items())
            if matches_prefix(path, pathname)
        ]

    async def push_view(self, pathname: str, view: View) -> None:
        self._pages.setdefault(pathname, []).append(view)

    async def health_check(self) -> bool:
        return True

    async def close(self) -> None:
        return None
