"""API Layer — FastAPI routes, dependencies and error handlers.

Invariants:
    - All endpoints return the {success, ...} JSON envelope
"""
