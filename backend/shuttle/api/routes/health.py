"""Health & Readiness Probes — liveness and readiness endpoints.

Invariants:
    - GET /health always returns 200 if the process is up (liveness)
    - GET /health/ready reports per-kind record counts and provider modes
"""

from fastapi import APIRouter, Depends, status

from shuttle.api.dependencies import get_catalog, get_payment_client, get_routing_client
from shuttle.infrastructure.payment_client import StripeCheckoutClient
from shuttle.infrastructure.routing_client import GraphHopperClient
from shuttle.services.resource_catalog import ResourceCatalog

router = APIRouter(prefix="/health", tags=["health"])


@router.get("", status_code=status.HTTP_200_OK)
async def health_check():
    """Basic liveness probe."""
    return {"status": "healthy", "service": "shuttle-api"}


@router.get("/ready")
async def readiness_check(
    catalog: ResourceCatalog = Depends(get_catalog),
    payments: StripeCheckoutClient = Depends(get_payment_client),
    routing: GraphHopperClient = Depends(get_routing_client),
):
    counts = catalog.counts()
    counts.pop("tokens", None)
    return {
        "status": "ready",
        "records": counts,
        "providers": {
            "payments": "stripe" if payments.configured else "unconfigured",
            "routing": "graphhopper" if routing.configured else "mock",
        },
    }
