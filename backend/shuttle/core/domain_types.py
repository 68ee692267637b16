"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - Every record id is a string, never a bare int
    - Price is per seat; totals are price * seats
    - All valid states encoded as Enums — no raw string matching

Design Decisions:
    - Records are plain dicts: the API stores open mappings, not fixed schemas
    - str Enums: serialize to JSON without custom encoders
"""

from enum import Enum
from typing import Any


# ─── Record Types ────────────────────────────────────────────────

Record = dict[str, Any]


# ─── Enums ───────────────────────────────────────────────────────

class ResourceKind(str, Enum):
    """Entity kinds, one registry each."""
    CARS = "cars"
    BOOKINGS = "bookings"
    CHECKOUT_SESSIONS = "checkout_sessions"
    DIRECTIONS = "directions"
    ROUTES = "routes"
    TOKENS = "tokens"
    USERS = "users"

    @property
    def label(self) -> str:
        """Singular human label used in error messages."""
        return _LABELS[self]


_LABELS = {
    ResourceKind.CARS: "Car",
    ResourceKind.BOOKINGS: "Booking",
    ResourceKind.CHECKOUT_SESSIONS: "Checkout session",
    ResourceKind.DIRECTIONS: "Direction",
    ResourceKind.ROUTES: "Route",
    ResourceKind.TOKENS: "Token",
    ResourceKind.USERS: "User",
}


class TravelProfile(str, Enum):
    """GraphHopper vehicle profiles the API accepts."""
    CAR = "car"
    BIKE = "bike"
    FOOT = "foot"


class CheckoutStatus(str, Enum):
    """Stripe Checkout session states."""
    OPEN = "open"
    COMPLETE = "complete"
    EXPIRED = "expired"


class PlanSource(str, Enum):
    """Where a route plan came from."""
    GRAPHHOPPER = "graphhopper"
    MOCK = "mock"
