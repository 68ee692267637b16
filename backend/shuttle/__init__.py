"""Shuttle Booking API — in-memory registries behind a FastAPI service.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)
"""
