"""Database Infrastructure — SQLAlchemy declarative base.

Invariants:
    - All sessions are async (AsyncSession), owned by DatabaseSessionManager

Design Decisions:
    - aiosqlite driver by default, asyncpg for PostgreSQL (ADR: native async, no thread pool overhead)
"""
