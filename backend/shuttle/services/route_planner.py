"""Route Planner — saved routes plus distance/duration planning.

Invariants:
    - A route holds >= 2 points as "lat,lng" strings and a TravelProfile
    - No GraphHopper key -> mock estimate; key present -> upstream result or UpstreamError
    - graphhopper_mock_fallback=True downgrades an UpstreamError to a mock estimate
    - Plan fields (distance, duration, instructions, planSource) merged onto the route record
"""

import logging

from shuttle.core.domain_types import Record, TravelProfile
from shuttle.core.errors import RecordValidationError, UpstreamError
from shuttle.core.registry import ResourceRegistry
from shuttle.core.route_estimate import RoutePlan, estimate_route
from shuttle.core.route_points import (
    Point,
    extract_points_from_url,
    extract_profile_from_url,
    parse_point,
)
from shuttle.infrastructure.routing_client import GraphHopperClient

logger = logging.getLogger(__name__)


def parse_points(points: list[str]) -> list[Point]:
    """Validate route points, naming the field on failure."""
    if len(points) < 2:
        raise RecordValidationError(
            ["points"], "Invalid route. Must contain at least 2 points",
        )
    try:
        return [parse_point(p) for p in points]
    except ValueError as e:
        raise RecordValidationError(["points"], f"Invalid point: {e}")


class RoutePlanner:
    def __init__(
        self,
        registry: ResourceRegistry,
        routing: GraphHopperClient,
        mock_fallback: bool = False,
    ):
        self.registry = registry
        self.routing = routing
        self.mock_fallback = mock_fallback

    @property
    def provider_name(self) -> str:
        return "graphhopper" if self.routing.configured else "mock"

    def extract_route(self, url: str) -> Record:
        """Save a route from the points embedded in a GraphHopper Maps URL."""
        points = extract_points_from_url(url)
        if len(points) < 2:
            raise RecordValidationError(
                ["url"], "Invalid URL. Must contain at least 2 points",
            )
        parse_points(points)
        profile = extract_profile_from_url(url)
        return self.registry.create({
            "points": points,
            "profile": profile.value,
            "sourceUrl": url,
        })

    async def plan_route(self, route_id: str) -> Record:
        route = self.registry.get(route_id)
        points = parse_points(list(route.get("points") or []))
        try:
            profile = TravelProfile(route.get("profile") or TravelProfile.CAR.value)
        except ValueError:
            raise RecordValidationError(["profile"], f"Unknown profile {route.get('profile')!r}")

        plan = await self._plan(points, profile)
        return self.registry.update(route_id, plan.to_record_fields())

    async def _plan(self, points: list[Point], profile: TravelProfile) -> RoutePlan:
        if not self.routing.configured:
            return estimate_route(points, profile)
        try:
            return await self.routing.plan_route(points, profile)
        except UpstreamError as e:
            if not self.mock_fallback:
                raise
            logger.warning(
                f"Routing provider failed, using mock estimate: {e.message}",
                extra={"provider": "graphhopper", "upstream_status": e.upstream_status},
            )
            return estimate_route(points, profile)
