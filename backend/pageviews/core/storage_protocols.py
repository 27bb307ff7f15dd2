"""Boundary Protocols — contract between the view-counting core and storage adapters.

Invariants:
    - Core NEVER imports concrete adapters; dependency arrows point inward only
    - has_feature() is pure: no IO, safe to call at startup
    - get() raises PageNotFoundError when has() is False (callers check first)
    - push_view() is all-or-nothing: readers never observe a partial append

Design Decisions:
    - Protocol over ABC: structural subtyping, adapters need no inheritance (ADR: ExMA anti-pattern)
    - Async IO methods: implementations talk to databases; capability query stays sync
"""

from typing import Protocol

from pageviews.core.domain_types import PageViews, TimeWindow, View, ViewEvent


class StorageAdapter(Protocol):
    """Contract for page-view persistence, implemented by infrastructure."""
    name: str

    def has_feature(self, name: str) -> bool: ...
    async def has(self, pathname: str) -> bool: ...
    async def get(self, pathname: str, window: TimeWindow) -> PageViews: ...
    async def get_all(
        self, pathname: str | None, window: TimeWindow,
    ) -> list[PageViews]: ...
    async def push_view(self, pathname: str, view: View) -> None: ...
    async def health_check(self) -> bool: ...
    async def close(self) -> None: ...


class ViewPublisher(Protocol):
    """Contract for realtime fanout of appended views."""
    def publish(self, event: ViewEvent) -> int: ...
