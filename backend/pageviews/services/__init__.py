"""Services Layer — view counting and realtime fanout.

Invariants:
    - Services depend on core Protocols, never on concrete adapters
    - Routes stay thin: parsing and HTTP shaping in api/, orchestration here
"""
