"""Infrastructure Layer — storage adapters, database sessions and logging setup.

Invariants:
    - Infrastructure implements core Protocols; core never imports from here
    - All database failures surface as StorageError

Design Decisions:
    - One module per adapter, selected by name in adapters.py (ADR: ExMA single responsibility)
"""
