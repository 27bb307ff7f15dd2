"""ORM Models — SQLAlchemy declarative models for persisted views.

Invariants:
    - All models inherit from Base (db/base.py)

Design Decisions:
    - Models imported here so Base.metadata.create_all sees every table
      before the schema is created (ADR: standard SQLAlchemy pattern)
"""

from pageviews.models.page_view import PageViewRecord  # noqa: F401
