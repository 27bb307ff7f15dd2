"""Pydantic Schemas — response envelopes for API endpoints.

Design Decisions:
    - Separate from core domain types: schemas are API contracts, dataclasses are domain (ADR: DDD boundary)
"""
