"""GraphHopper Routes — saved routes, URL extraction, and route planning.

Invariants:
    - /routes follows the uniform CRUD envelope
    - /extract saves a route from a GraphHopper Maps URL (>= 2 points, else 400)
    - /routes/{id}/plan stores distance, duration and instructions on the route
    - /status reports which provider plans routes (graphhopper | mock)
"""

from fastapi import APIRouter, Depends, status

from shuttle.api.dependencies import get_catalog, get_route_planner
from shuttle.api.routes.crud import build_crud_router, item_envelope
from shuttle.core.domain_types import ResourceKind
from shuttle.schemas.resources import ExtractRouteRequest, RouteBody
from shuttle.services.resource_catalog import ResourceCatalog
from shuttle.services.route_planner import RoutePlanner

router = APIRouter(prefix="/api/graphhopper", tags=["graphhopper"])

routes_router = build_crud_router(
    kind=ResourceKind.ROUTES,
    prefix="/routes",
    body_model=RouteBody,
    tags=["graphhopper"],
)


@routes_router.post("/{route_id}/plan", summary="Plan distance and duration for a saved route")
async def plan_route(
    route_id: str, planner: RoutePlanner = Depends(get_route_planner),
):
    return item_envelope(await planner.plan_route(route_id))


router.include_router(routes_router)


@router.post("/extract", status_code=status.HTTP_201_CREATED)
async def extract_route(
    body: ExtractRouteRequest, planner: RoutePlanner = Depends(get_route_planner),
):
    """Extract coordinates from a GraphHopper Maps URL and save them as a route."""
    route = planner.extract_route(body.url)
    return {
        "success": True,
        "message": "Route extracted and saved successfully",
        "item": route,
    }


@router.get("/status")
async def routing_status(
    catalog: ResourceCatalog = Depends(get_catalog),
    planner: RoutePlanner = Depends(get_route_planner),
):
    return {
        "ok": True,
        "message": "GraphHopper API proxy running",
        "provider": planner.provider_name,
        "saved_routes_count": len(catalog.routes),
    }
