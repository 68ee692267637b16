"""API Dependencies — FastAPI providers for the catalog, clients and services.

Invariants:
    - Everything stateful lives on app.state (set by create_app); nothing module-global
    - require_token is a no-op when auth_enabled is False
    - Tests swap collaborators via app.dependency_overrides on these callables
"""

from fastapi import Depends, Header, Request

from shuttle.config import Settings
from shuttle.infrastructure.payment_client import StripeCheckoutClient
from shuttle.infrastructure.routing_client import GraphHopperClient
from shuttle.services.api_tokens import ApiUser, TokenService
from shuttle.services.checkout_service import CheckoutService
from shuttle.services.resource_catalog import ResourceCatalog
from shuttle.services.route_planner import RoutePlanner
from shuttle.services.user_service import UserService


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_catalog(request: Request) -> ResourceCatalog:
    return request.app.state.catalog


def get_payment_client(request: Request) -> StripeCheckoutClient:
    return request.app.state.payment_client


def get_routing_client(request: Request) -> GraphHopperClient:
    return request.app.state.routing_client


def get_checkout_service(
    catalog: ResourceCatalog = Depends(get_catalog),
    payments: StripeCheckoutClient = Depends(get_payment_client),
    settings: Settings = Depends(get_app_settings),
) -> CheckoutService:
    return CheckoutService(
        catalog.checkout_sessions,
        payments,
        currency=settings.checkout_currency,
        success_url=settings.checkout_success_url,
        cancel_url=settings.checkout_cancel_url,
    )


def get_route_planner(
    catalog: ResourceCatalog = Depends(get_catalog),
    routing: GraphHopperClient = Depends(get_routing_client),
    settings: Settings = Depends(get_app_settings),
) -> RoutePlanner:
    return RoutePlanner(
        catalog.routes, routing, mock_fallback=settings.graphhopper_mock_fallback,
    )


def get_token_service(
    catalog: ResourceCatalog = Depends(get_catalog),
    settings: Settings = Depends(get_app_settings),
) -> TokenService:
    return TokenService(
        catalog.tokens,
        ApiUser(
            id="USER-001",
            username=settings.api_username,
            password=settings.api_password,
            email=settings.api_user_email,
        ),
    )


async def require_token(
    authorization: str | None = Header(None),
    settings: Settings = Depends(get_app_settings),
    tokens: TokenService = Depends(get_token_service),
) -> None:
    """Reject requests without a token issued by /api-security/login."""
    if not settings.auth_enabled:
        return
    tokens.verify(authorization)


def get_user_service(
    catalog: ResourceCatalog = Depends(get_catalog),
    settings: Settings = Depends(get_app_settings),
) -> UserService:
    return UserService(
        catalog.users,
        secret=settings.jwt_secret,
        algorithm=settings.jwt_algorithm,
        expires_minutes=settings.jwt_expires_minutes,
        hash_rounds=settings.password_hash_rounds,
    )
