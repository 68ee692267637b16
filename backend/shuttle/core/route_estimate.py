"""Route Estimate — local stand-in for the routing provider.

Invariants:
    - estimate_route() returns the same RoutePlan shape GraphHopper responses map to
    - distance_m is the haversine sum over consecutive points
    - duration_s = distance / profile speed; one instruction per leg plus arrival
    - Pure: no IO, deterministic for the same input
"""

import math
from dataclasses import asdict, dataclass, field
from typing import Any

from shuttle.core.domain_types import PlanSource, TravelProfile
from shuttle.core.route_points import Point

EARTH_RADIUS_M = 6_371_000.0

# km/h
PROFILE_SPEEDS = {
    TravelProfile.CAR: 60.0,
    TravelProfile.BIKE: 16.0,
    TravelProfile.FOOT: 5.0,
}


@dataclass
class RouteInstruction:
    text: str
    distance_m: float
    duration_s: float


@dataclass
class RoutePlan:
    """Distance, duration and turn-by-turn text for an ordered list of points."""
    distance_m: float
    duration_s: float
    instructions: list[RouteInstruction] = field(default_factory=list)
    source: PlanSource = PlanSource.MOCK

    def to_record_fields(self) -> dict[str, Any]:
        return {
            "distance": round(self.distance_m, 1),
            "duration": round(self.duration_s, 1),
            "instructions": [asdict(i) for i in self.instructions],
            "planSource": self.source.value,
        }


def haversine_m(a: Point, b: Point) -> float:
    lat1, lng1 = map(math.radians, a)
    lat2, lng2 = map(math.radians, b)
    dlat = lat2 - lat1
    dlng = lng2 - lng1
    h = math.sin(dlat / 2) ** 2 + math.cos(lat1) * math.cos(lat2) * math.sin(dlng / 2) ** 2
    return 2 * EARTH_RADIUS_M * math.asin(math.sqrt(h))


def estimate_route(points: list[Point], profile: TravelProfile = TravelProfile.CAR) -> RoutePlan:
    """Straight-line plan through points at the profile's average speed."""
    if len(points) < 2:
        raise ValueError("a route needs at least 2 points")
    speed_ms = PROFILE_SPEEDS[profile] * 1000 / 3600

    instructions = []
    total = 0.0
    for index, (start, end) in enumerate(zip(points, points[1:]), start=1):
        leg = haversine_m(start, end)
        total += leg
        instructions.append(RouteInstruction(
            text=f"Leg {index}: head from {_fmt(start)} to {_fmt(end)}",
            distance_m=round(leg, 1),
            duration_s=round(leg / speed_ms, 1),
        ))
    instructions.append(RouteInstruction("Arrive at destination", 0.0, 0.0))
    return RoutePlan(
        distance_m=total,
        duration_s=total / speed_ms,
        instructions=instructions,
        source=PlanSource.MOCK,
    )


def _fmt(point: Point) -> str:
    return f"{point[0]:.5f},{point[1]:.5f}"
