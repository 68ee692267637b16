"""Checkout Service — payment-provider calls wrapped in local registry bookkeeping.

Invariants:
    - Required fields validated BEFORE the provider is called
    - A session is recorded only after the provider returns it (no orphan records)
    - Refresh/cancel require the session to exist locally (404 otherwise)
    - Line item: unit_amount = price in cents, rounded half up, per seat; quantity = seats
"""

import logging
from decimal import ROUND_HALF_UP, Decimal
from typing import Any

from shuttle.core.domain_types import CheckoutStatus, Record
from shuttle.core.errors import RecordValidationError
from shuttle.core.registry import ResourceRegistry
from shuttle.infrastructure.payment_client import LineItem, StripeCheckoutClient

logger = logging.getLogger(__name__)


class CheckoutService:
    def __init__(
        self,
        registry: ResourceRegistry,
        payments: StripeCheckoutClient,
        currency: str = "usd",
        success_url: str = "",
        cancel_url: str = "",
    ):
        self.registry = registry
        self.payments = payments
        self.currency = currency
        self.success_url = success_url
        self.cancel_url = cancel_url

    async def create_session(self, fields: dict[str, Any]) -> Record:
        self.registry.validate(fields)
        seats, price = _seats_and_price(fields)

        remote = await self.payments.create_session(
            line_items=[LineItem(
                name=f"Shuttle Booking: {fields['shuttleRoute']}",
                description=f"Car ID: {fields['shuttleId']}, Seats: {seats}",
                unit_amount=_to_minor_units(price),
                quantity=seats,
            )],
            currency=self.currency,
            success_url=self.success_url,
            cancel_url=self.cancel_url,
            metadata={
                "shuttleId": str(fields["shuttleId"]),
                "userId": str(fields["userId"]),
            },
        )
        logger.info(
            f"Checkout session {remote.session_id} created",
            extra={"provider": "stripe", "record_id": remote.session_id},
        )
        return self.registry.create({
            **fields,
            "sessionId": remote.session_id,
            "url": remote.url,
            "status": remote.status or CheckoutStatus.OPEN.value,
            "paymentStatus": remote.payment_status,
            "amountTotal": remote.amount_total,
            "currency": remote.currency or self.currency,
        })

    async def refresh_session(self, session_id: str) -> Record:
        """Pull the provider's current status into the local record."""
        self.registry.get(session_id)
        remote = await self.payments.retrieve_session(session_id)
        return self.registry.update(session_id, {
            "status": remote.status,
            "paymentStatus": remote.payment_status,
            "amountTotal": remote.amount_total,
        })

    async def cancel_session(self, session_id: str) -> Record:
        self.registry.get(session_id)
        remote = await self.payments.expire_session(session_id)
        logger.info(
            f"Checkout session {session_id} expired",
            extra={"provider": "stripe", "record_id": session_id},
        )
        return self.registry.update(session_id, {
            "status": remote.status or CheckoutStatus.EXPIRED.value,
            "paymentStatus": remote.payment_status,
        })


def _seats_and_price(fields: dict[str, Any]) -> tuple[int, float]:
    try:
        seats = int(fields["seats"])
        price = float(fields["price"])
    except (TypeError, ValueError):
        raise RecordValidationError(
            ["seats", "price"], "seats must be an integer and price a number",
        )
    invalid = [name for name, value in (("seats", seats), ("price", price)) if value <= 0]
    if invalid:
        raise RecordValidationError(invalid, f"Must be positive: {', '.join(invalid)}")
    return seats, price


def _to_minor_units(price: float) -> int:
    """Price to cents, halves rounded up (12.125 -> 1213)."""
    cents = Decimal(str(price)) * 100
    return int(cents.quantize(Decimal("1"), rounding=ROUND_HALF_UP))
