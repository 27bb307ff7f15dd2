"""Domain Types — immutable value objects shared by adapters, services and routes.

Invariants:
    - View is frozen: once appended it is never mutated
    - TimeWindow bounds are exclusive; a missing bound is open
    - Pathname is the page identity; only paths longer than "/" are pages

Design Decisions:
    - Frozen dataclasses over Pydantic: domain layer stays free of API concerns
      (ADR: schemas/ owns the wire format)
    - Capability names as str Enum: serialize to JSON without custom encoders
"""

import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class AdapterFeature(str, Enum):
    """Optional capabilities a storage adapter may advertise."""
    SUBSCRIBE = "subscribe"


def now_ms() -> int:
    """Current wall-clock time in epoch milliseconds."""
    return int(time.time() * 1000)


def is_page_path(pathname: str) -> bool:
    """Root ("/") and empty paths do not identify a page."""
    return len(pathname) > 1


@dataclass(frozen=True)
class View:
    """One recorded visit."""
    timestamp: int
    meta: Any = None

    def to_dict(self) -> dict:
        data: dict[str, Any] = {"timestamp": self.timestamp}
        if self.meta is not None:
            data["meta"] = self.meta
        return data


@dataclass(frozen=True)
class TimeWindow:
    """Optional (after, before) bounds, both exclusive."""
    before: int | None = None
    after: int | None = None

    @property
    def is_open(self) -> bool:
        return self.before is None and self.after is None

    def contains(self, timestamp: int) -> bool:
        if self.before is not None and timestamp >= self.before:
            return False
        if self.after is not None and timestamp <= self.after:
            return False
        return True

    def apply(self, views: list[View]) -> list[View]:
        if self.is_open:
            return list(views)
        return [v for v in views if self.contains(v.timestamp)]


@dataclass(frozen=True)
class PageViews:
    """A page and its (possibly window-filtered) views, in append order."""
    pathname: str
    views: list[View] = field(default_factory=list)

    @property
    def count(self) -> int:
        return len(self.views)


@dataclass(frozen=True)
class ViewEvent:
    """Realtime payload: a view that was just appended to a page."""
    pathname: str
    view: View

    def to_dict(self) -> dict:
        return {"pathname": self.pathname, "view": self.view.to_dict()}


def matches_prefix(pathname: str, scope: str | None) -> bool:
    """Bulk-read scoping: "/" or empty selects every page, else prefix match."""
    if not scope or scope == "/":
        return True
    return pathname.startswith(scope)
