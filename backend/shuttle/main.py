"""Shuttle Booking API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Catalog and collaborator clients built in create_app and stored on app.state
    - Global error handlers map ShuttleError -> {success: false, ...} responses
    - CORS configured from settings
    - Collaborator HTTP pools closed on shutdown via lifespan

Design Decisions:
    - create_app(settings) factory: tests build isolated apps with their own registries
    - State built outside lifespan so ASGI test transports (no lifespan) still see it
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import RedirectResponse

from shuttle.api.dependencies import get_user_service
from shuttle.api.error_handlers import register_error_handlers
from shuttle.api.routes import (
    bookings, cars, checkout, directions, graphhopper, health, security, users,
)
from shuttle.config import Settings, get_settings
from shuttle.infrastructure.observability import setup_logging
from shuttle.infrastructure.payment_client import StripeCheckoutClient
from shuttle.infrastructure.routing_client import GraphHopperClient
from shuttle.services.resource_catalog import build_catalog

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings: Settings = app.state.settings
    setup_logging(settings.log_level, settings.log_format)
    logger.info("Shuttle API started")
    yield
    await close_clients(app)
    logger.info("Shuttle API shutting down")


async def close_clients(app: FastAPI) -> None:
    """Close the collaborator HTTP pools built by create_app."""
    await app.state.payment_client.aclose()
    await app.state.routing_client.aclose()


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or get_settings()
    app = FastAPI(
        title="Shuttle Booking API",
        version="1.0.0",
        description="Book shuttles, manage cars and bookings, and run Stripe checkout sessions.",
        lifespan=lifespan,
    )

    app.state.settings = settings
    app.state.catalog = build_catalog(seed_demo_data=settings.seed_demo_data)
    if settings.seed_demo_data:
        get_user_service(app.state.catalog, settings).seed_demo_users()
    app.state.payment_client = StripeCheckoutClient(
        settings.stripe_secret_key,
        base_url=settings.stripe_api_base,
        timeout_seconds=settings.payment_timeout_seconds,
    )
    app.state.routing_client = GraphHopperClient(
        settings.graphhopper_api_key,
        base_url=settings.graphhopper_base_url,
        timeout_seconds=settings.routing_timeout_seconds,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(health.router)
    app.include_router(security.router)
    app.include_router(cars.router)
    app.include_router(bookings.router)
    app.include_router(checkout.router)
    app.include_router(directions.router)
    app.include_router(graphhopper.router)
    app.include_router(users.router)

    @app.get("/", include_in_schema=False)
    async def root():
        return RedirectResponse("/docs")

    register_error_handlers(app)
    return app


app = create_app()
