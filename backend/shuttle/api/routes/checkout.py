"""Checkout Sessions — Stripe Checkout sessions with local bookkeeping.

Invariants:
    - POST creates the remote session first, then records it (id = provider session id)
    - Local list/get/put/delete never call the provider
    - /cancel expires the remote session; /refresh pulls its current status
    - Every route requires a token
"""

from fastapi import Depends, status

from shuttle.api.dependencies import get_checkout_service, require_token
from shuttle.api.routes.crud import build_crud_router, item_envelope
from shuttle.core.domain_types import ResourceKind
from shuttle.schemas.resources import CheckoutSessionBody
from shuttle.services.checkout_service import CheckoutService

router = build_crud_router(
    kind=ResourceKind.CHECKOUT_SESSIONS,
    prefix="/api/checkout/sessions",
    body_model=CheckoutSessionBody,
    tags=["checkout"],
    dependencies=[Depends(require_token)],
    include_create=False,
)


@router.post("", status_code=status.HTTP_201_CREATED, summary="Create a Stripe checkout session")
async def create_checkout_session(
    body: CheckoutSessionBody,
    checkout: CheckoutService = Depends(get_checkout_service),
):
    return item_envelope(await checkout.create_session(body.to_fields()))


@router.post("/{session_id}/refresh", summary="Sync status from Stripe")
async def refresh_checkout_session(
    session_id: str, checkout: CheckoutService = Depends(get_checkout_service),
):
    return item_envelope(await checkout.refresh_session(session_id))


@router.post("/{session_id}/cancel", summary="Expire the Stripe session")
async def cancel_checkout_session(
    session_id: str, checkout: CheckoutService = Depends(get_checkout_service),
):
    return item_envelope(await checkout.cancel_session(session_id))
