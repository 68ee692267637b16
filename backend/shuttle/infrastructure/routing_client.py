"""GraphHopper Client — distance, duration and instructions for an ordered point list.

Invariants:
    - GET /route with one `point` param per point, in order
    - Response paths[0] mapped to RoutePlan(source=GRAPHHOPPER); distance in m, time ms -> s
    - Empty `paths` or missing key -> UpstreamError; no retries
"""

import logging
from typing import Any

import httpx

from shuttle.core.domain_types import PlanSource, TravelProfile
from shuttle.core.errors import ProviderNotConfiguredError, UpstreamError
from shuttle.core.route_estimate import RouteInstruction, RoutePlan
from shuttle.core.route_points import Point
from shuttle.infrastructure.provider_client import ProviderClient

logger = logging.getLogger(__name__)


class GraphHopperClient(ProviderClient):
    """Async GraphHopper Routing API client."""

    provider = "graphhopper"

    def __init__(
        self,
        api_key: str | None,
        base_url: str = "https://graphhopper.com/api/1",
        timeout_seconds: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        super().__init__(base_url, timeout_seconds, transport=transport)
        self.api_key = api_key

    @property
    def configured(self) -> bool:
        return bool(self.api_key)

    async def plan_route(
        self, points: list[Point], profile: TravelProfile = TravelProfile.CAR,
    ) -> RoutePlan:
        if not self.configured:
            raise ProviderNotConfiguredError(self.provider)
        params: list[tuple[str, str]] = [("point", f"{lat},{lng}") for lat, lng in points]
        params += [
            ("profile", profile.value),
            ("locale", "en"),
            ("instructions", "true"),
            ("calc_points", "false"),
            ("key", self.api_key),
        ]
        logger.info(
            f"Requesting {profile.value} route through {len(points)} points",
            extra={"provider": self.provider, "profile": profile.value},
        )
        body = await self._request("GET", "/route", params=params)
        return _plan_from_response(body)


def _plan_from_response(body: dict[str, Any]) -> RoutePlan:
    paths = body.get("paths")
    if not isinstance(paths, list) or not paths:
        raise UpstreamError("graphhopper", "response contains no paths")
    try:
        path = paths[0]
        instructions = [
            RouteInstruction(
                text=str(i.get("text", "")),
                distance_m=float(i.get("distance", 0.0)),
                duration_s=float(i.get("time", 0)) / 1000,
            )
            for i in path.get("instructions") or []
        ]
        return RoutePlan(
            distance_m=float(path["distance"]),
            duration_s=float(path["time"]) / 1000,
            instructions=instructions,
            source=PlanSource.GRAPHHOPPER,
        )
    except (KeyError, TypeError, ValueError, AttributeError) as e:
        raise UpstreamError("graphhopper", f"malformed path in response: {e}")
