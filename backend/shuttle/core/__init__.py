"""Core Layer — pure domain logic, no network IO, no async.

Invariants:
    - No module in core/ imports from services/, api/, or infrastructure/
    - Registry operations are synchronous and never suspend
"""
