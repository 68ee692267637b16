"""Pydantic Schemas — request validation at the API boundary.

Invariants:
    - Schemas coerce types; registries own required-field rules
"""
