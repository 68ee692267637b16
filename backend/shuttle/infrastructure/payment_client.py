"""Stripe Checkout Client — create, query and expire remote checkout sessions.

Invariants:
    - Bodies are form-encoded with Stripe's bracket notation (line_items[0][quantity])
    - Missing secret key -> ProviderNotConfiguredError (503) before any network call
    - All upstream failures mapped to UpstreamError (provider_client.py)

Design Decisions:
    - Plain httpx over the Stripe SDK: three endpoints, same client stack as routing
"""

import logging
from dataclasses import dataclass, field
from typing import Any

import httpx

from shuttle.core.errors import ProviderNotConfiguredError, UpstreamError
from shuttle.infrastructure.provider_client import ProviderClient

logger = logging.getLogger(__name__)


@dataclass
class LineItem:
    name: str
    unit_amount: int
    quantity: int
    description: str | None = None


@dataclass
class CheckoutSession:
    """The subset of a Stripe Checkout Session this API keeps."""
    session_id: str
    url: str | None
    status: str | None
    payment_status: str | None = None
    amount_total: int | None = None
    currency: str | None = None
    metadata: dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_stripe(cls, body: dict[str, Any]) -> "CheckoutSession":
        if not body.get("id"):
            raise UpstreamError("stripe", "checkout session response has no id")
        return cls(
            session_id=body["id"],
            url=body.get("url"),
            status=body.get("status"),
            payment_status=body.get("payment_status"),
            amount_total=body.get("amount_total"),
            currency=body.get("currency"),
            metadata=body.get("metadata") or {},
        )


def encode_form(data: Any, prefix: str = "") -> list[tuple[str, str]]:
    """Flatten nested dicts/lists into Stripe-style form pairs."""
    pairs: list[tuple[str, str]] = []
    if isinstance(data, dict):
        for key, value in data.items():
            name = f"{prefix}[{key}]" if prefix else str(key)
            pairs.extend(encode_form(value, name))
    elif isinstance(data, (list, tuple)):
        for index, value in enumerate(data):
            pairs.extend(encode_form(value, f"{prefix}[{index}]"))
    elif data is None:
        pass
    elif isinstance(data, bool):
        pairs.append((prefix, "true" if data else "false"))
    else:
        pairs.append((prefix, str(data)))
    return pairs


class StripeCheckoutClient(ProviderClient):
    """Async Stripe Checkout Sessions client."""

    provider = "stripe"

    def __init__(
        self,
        secret_key: str | None,
        base_url: str = "https://api.stripe.com/v1",
        timeout_seconds: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        headers = {"Authorization": f"Bearer {secret_key}"} if secret_key else None
        super().__init__(base_url, timeout_seconds, headers, transport)
        self.configured = bool(secret_key)

    async def create_session(
        self,
        *,
        line_items: list[LineItem],
        currency: str,
        success_url: str,
        cancel_url: str,
        metadata: dict[str, str] | None = None,
    ) -> CheckoutSession:
        self._require_configured()
        payload = {
            "mode": "payment",
            "payment_method_types": ["card"],
            "success_url": success_url,
            "cancel_url": cancel_url,
            "line_items": [
                {
                    "price_data": {
                        "currency": currency,
                        "product_data": {
                            "name": item.name,
                            "description": item.description,
                        },
                        "unit_amount": item.unit_amount,
                    },
                    "quantity": item.quantity,
                }
                for item in line_items
            ],
            "metadata": metadata or {},
        }
        body = await self._request(
            "POST", "/checkout/sessions", data=dict(encode_form(payload)),
        )
        return CheckoutSession.from_stripe(body)

    async def retrieve_session(self, session_id: str) -> CheckoutSession:
        self._require_configured()
        body = await self._request("GET", f"/checkout/sessions/{session_id}")
        return CheckoutSession.from_stripe(body)

    async def expire_session(self, session_id: str) -> CheckoutSession:
        self._require_configured()
        body = await self._request("POST", f"/checkout/sessions/{session_id}/expire")
        return CheckoutSession.from_stripe(body)

    def _require_configured(self) -> None:
        if not self.configured:
            raise ProviderNotConfiguredError(self.provider)

    def _error_message(self, response: httpx.Response) -> str:
        try:
            body = response.json()
        except ValueError:
            return super()._error_message(response)
        error = body.get("error") if isinstance(body, dict) else None
        if isinstance(error, dict) and error.get("message"):
            return error["message"]
        return super()._error_message(response)
