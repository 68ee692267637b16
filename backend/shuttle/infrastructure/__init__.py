"""Infrastructure Layer — collaborator clients and cross-cutting concerns.

Invariants:
    - Infrastructure never imports from services/ or api/
    - Every external call maps failures to UpstreamError
"""
