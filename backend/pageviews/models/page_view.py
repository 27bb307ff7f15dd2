"""PageView ORM — one row per recorded view.

Invariants:
    - Rows are append-only; the core never updates or deletes them
    - id is monotonically increasing: ORDER BY id == append order
    - timestamp is epoch milliseconds (BigInteger: exceeds 32-bit range)

Design Decisions:
    - Single table, no pages table: a page exists iff it has at least one row
    - JSON column for meta: arbitrary client payload stored as-is
"""

from typing import Any

from sqlalchemy import BigInteger, Integer, String, JSON
from sqlalchemy.orm import Mapped, mapped_column

from pageviews.db.base import Base


class PageViewRecord(Base):
    """A single view of a page."""
    __tablename__ = "page_views"

    id: Mapped[int] = mapped_column(
        Integer, primary_key=True, autoincrement=True,
    )
    pathname: Mapped[str] = mapped_column(
        String(2048), nullable=False, index=True,
    )
    timestamp: Mapped[int] = mapped_column(
        BigInteger, nullable=False, index=True,
    )
    meta: Mapped[Any | None] = mapped_column(JSON, nullable=True)
