"""Resource Catalog — composition root holding one registry per entity kind.

Invariants:
    - Exactly one ResourceRegistry per ResourceKind, created empty at startup
    - Required fields, id field and id strategy for each kind are declared here only
    - Demo cars CAR-001 and CAR-002 seeded when seed_demo_data is on

Design Decisions:
    - Catalog injected into handlers (app.state + Depends) over module-level lists
"""

import logging
from dataclasses import dataclass

from shuttle.core.domain_types import ResourceKind
from shuttle.core.identifiers import prefixed_random_ids, token_ids, uuid_ids
from shuttle.core.registry import ResourceRegistry

logger = logging.getLogger(__name__)

DEMO_CARS = (
    {
        "id": "CAR-001",
        "name": "Toyota Quantum",
        "registration": "2025-QNT-001",
        "numberPlate": "CA 123-456",
    },
    {
        "id": "CAR-002",
        "name": "Ford Transit",
        "registration": "2025-FRD-002",
        "numberPlate": "CA 789-012",
    },
)


@dataclass
class ResourceCatalog:
    cars: ResourceRegistry
    bookings: ResourceRegistry
    checkout_sessions: ResourceRegistry
    directions: ResourceRegistry
    routes: ResourceRegistry
    tokens: ResourceRegistry
    users: ResourceRegistry

    def get(self, kind: ResourceKind) -> ResourceRegistry:
        return getattr(self, kind.value)

    def counts(self) -> dict[str, int]:
        return {kind.value: len(self.get(kind)) for kind in ResourceKind}

    def seed_demo_data(self) -> None:
        for car in DEMO_CARS:
            if car["id"] not in self.cars:
                self.cars.create(car)
        logger.info(f"Seeded {len(DEMO_CARS)} demo cars")


def build_catalog(seed_demo_data: bool = True) -> ResourceCatalog:
    catalog = ResourceCatalog(
        cars=ResourceRegistry(
            ResourceKind.CARS,
            required_fields=("name", "registration", "numberPlate"),
            id_generator=prefixed_random_ids("CAR-"),
        ),
        bookings=ResourceRegistry(
            ResourceKind.BOOKINGS,
            required_fields=(
                "shuttle_id", "passengerName", "email", "route", "date", "time",
            ),
            id_generator=prefixed_random_ids("BKG-"),
        ),
        checkout_sessions=ResourceRegistry(
            ResourceKind.CHECKOUT_SESSIONS,
            required_fields=(
                "shuttleId", "shuttleRoute", "seats", "price", "userId", "userName",
            ),
            id_field="sessionId",
        ),
        directions=ResourceRegistry(
            ResourceKind.DIRECTIONS,
            required_fields=("email", "path"),
            id_generator=uuid_ids(),
        ),
        routes=ResourceRegistry(
            ResourceKind.ROUTES,
            required_fields=("points",),
            id_generator=prefixed_random_ids("R-"),
        ),
        tokens=ResourceRegistry(
            ResourceKind.TOKENS,
            required_fields=("userId",),
            id_field="token",
            id_generator=token_ids(),
        ),
        users=ResourceRegistry(
            ResourceKind.USERS,
            required_fields=("username", "email", "passwordHash", "role"),
            id_generator=prefixed_random_ids("USR-"),
        ),
    )
    if seed_demo_data:
        catalog.seed_demo_data()
    return catalog
