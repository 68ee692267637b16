"""Directions — free-text travel paths saved per user email.

List supports ?email=... like any other field filter.
"""

from shuttle.api.routes.crud import build_crud_router
from shuttle.core.domain_types import ResourceKind
from shuttle.schemas.resources import DirectionBody

router = build_crud_router(
    kind=ResourceKind.DIRECTIONS,
    prefix="/api/directions",
    body_model=DirectionBody,
    tags=["directions"],
)
