"""SQL Storage Adapter — persists views through SQLAlchemy (SQLite or PostgreSQL).

Invariants:
    - One row per view; ORDER BY id reproduces append order
    - Time windows are applied in SQL with exclusive bounds
    - push_view commits a single INSERT: readers see the whole view or nothing
    - No "subscribe" capability: rows written by other processes are invisible to
      this process until read, so live fanout cannot be guaranteed

Design Decisions:
    - All session handling delegated to DatabaseSessionManager (rollback + StorageError mapping)
    - Prefix scoping uses startswith(autoescape=True): "%" and "_" in paths match literally
"""

import logging

from sqlalchemy import Select, exists, select

from pageviews.core.domain_types import PageViews, TimeWindow, View
from pageviews.core.errors import PageNotFoundError
from pageviews.infrastructure.database import DatabaseSessionManager
from pageviews.models.page_view import PageViewRecord

logger = logging.getLogger(__name__)


def _apply_window(stmt: Select, window: TimeWindow) -> Select:
    if window.before is not None:
        stmt = stmt.where(PageViewRecord.timestamp < window.before)
    if window.after is not None:
        stmt = stmt.where(PageViewRecord.timestamp > window.after)
    return stmt


def _scope(stmt: Select, pathname: str | None) -> Select:
    if not pathname or pathname == "/":
        return stmt
    return stmt.where(
        PageViewRecord.pathname.startswith(pathname, autoescape=True),
    )


def _to_view(row: PageViewRecord) -> View:
    return View(timestamp=row.timestamp, meta=row.meta)


class SqlStorageAdapter:
    """Storage adapter backed by the page_views table."""

    name = "sql"
    features: frozenset[str] = frozenset()

    def __init__(self, db: DatabaseSessionManager):
        self._db = db

    def has_feature(self, name: str) -> bool:
        return name in self.features

    async def init(self) -> None:
        await self._db.create_schema()
        logger.info("SQL storage schema ready", extra={"adapter": self.name})

    async def has(self, pathname: str) -> bool:
        async with self._db.session() as db:
            result = await db.execute(
                select(exists().where(PageViewRecord.pathname == pathname)),
            )
            return bool(result.scalar())

    async def get(self, pathname: str, window: TimeWindow) -> PageViews:
        async with self._db.session() as db:
            found = await db.execute(
                select(exists().where(PageViewRecord.pathname == pathname)),
            )
            if not found.scalar():
                raise PageNotFoundError(pathname)
            stmt = _apply_window(
                select(PageViewRecord).where(
                    PageViewRecord.pathname == pathname,
                ),
                window,
            ).order_by(PageViewRecord.id)
            rows = (await db.execute(stmt)).scalars().all()
        return PageViews(pathname, [_to_view(r) for r in rows])

    async def get_all(
        self, pathname: str | None, window: TimeWindow,
    ) -> list[PageViews]:
        page_stmt = _scope(select(PageViewRecord.pathname).distinct(), pathname)
        view_stmt = _apply_window(
            _scope(select(PageViewRecord), pathname), window,
        ).order_by(PageViewRecord.id)
        async with self._db.session() as db:
            pages = (await db.execute(page_stmt)).scalars().all()
            rows = (await db.execute(view_stmt)).scalars().all()

        grouped: dict[str, list[View]] = {path: [] for path in sorted(pages)}
        for row in rows:
            grouped.setdefault(row.pathname, []).append(_to_view(row))
        return [PageViews(path, views) for path, views in grouped.items()]

    async def push_view(self, pathname: str, view: View) -> None:
        async with self._db.session() as db:
            db.add(PageViewRecord(
                pathname=pathname, timestamp=view.timestamp, meta=view.meta,
            ))
            await db.commit()

    async def health_check(self) -> bool:
        return await self._db.health_check()

    async def close(self) -> None:
        await self._db.dispose()
