"""View Schemas — Pydantic response envelopes for the analytics endpoints.

Invariants:
    - ViewCountResponse: {"views": int}
    - ExportResponse: {"data": [{"pathname", "views": [...]}], "time": epoch ms}
    - meta omitted from a view when absent

Design Decisions:
    - Built from domain dataclasses via from_domain(): core stays free of Pydantic
"""

from typing import Any

from pydantic import BaseModel, Field

from pageviews.core.domain_types import PageViews, View


class ViewOut(BaseModel):
    """A recorded view as exposed over HTTP."""
    timestamp: int
    meta: Any = None

    @classmethod
    def from_domain(cls, view: View) -> "ViewOut":
        return cls(timestamp=view.timestamp, meta=view.meta)


class PageViewsOut(BaseModel):
    """One page and its views."""
    pathname: str
    views: list[ViewOut] = Field(default_factory=list)

    @classmethod
    def from_domain(cls, page: PageViews) -> "PageViewsOut":
        return cls(
            pathname=page.pathname,
            views=[ViewOut.from_domain(v) for v in page.views],
        )


class ExportResponse(BaseModel):
    """Bulk export envelope (?all=true)."""
    data: list[PageViewsOut]
    time: int


class ViewCountResponse(BaseModel):
    """Single-page count, after the optional increment."""
    views: int = Field(ge=0)
