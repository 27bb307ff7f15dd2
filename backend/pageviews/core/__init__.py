"""Core Layer — pure domain types, parsing rules, protocols and errors.

Invariants:
    - Core never imports from api/, infrastructure/ or services/
    - No IO in this package; adapters are reached only through Protocol types
"""
