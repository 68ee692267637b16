"""Bookings — passenger seat reservations on a shuttle."""

from shuttle.api.routes.crud import build_crud_router
from shuttle.core.domain_types import ResourceKind
from shuttle.schemas.resources import BookingBody

router = build_crud_router(
    kind=ResourceKind.BOOKINGS,
    prefix="/bookings",
    body_model=BookingBody,
    tags=["bookings"],
)
