"""Stripe Checkout Client — request encoding and upstream error mapping.

Uses httpx.MockTransport: no network, full request inspection.
"""

from urllib.parse import parse_qsl

import httpx
import pytest

from shuttle.core.errors import ProviderNotConfiguredError, UpstreamError
from shuttle.infrastructure.payment_client import (
    LineItem,
    StripeCheckoutClient,
    encode_form,
)

SESSION_BODY = {
    "id": "cs_test_a1",
    "url": "https://checkout.stripe.com/c/pay/cs_test_a1",
    "status": "open",
    "payment_status": "unpaid",
    "amount_total": 24000,
    "currency": "usd",
}


def _client(handler) -> StripeCheckoutClient:
    return StripeCheckoutClient(
        "sk_test_fake", base_url="https://stripe.test/v1",
        transport=httpx.MockTransport(handler),
    )


async def _create(client: StripeCheckoutClient):
    return await client.create_session(
        line_items=[LineItem(
            name="Shuttle Booking: Cape Town → Paarl",
            description="Car ID: SHTL-001, Seats: 2",
            unit_amount=12000,
            quantity=2,
        )],
        currency="usd",
        success_url="https://example.test/success",
        cancel_url="https://example.test/cancel",
    )


def test_encode_form_bracket_notation():
    pairs = dict(encode_form({
        "mode": "payment",
        "line_items": [{"price_data": {"unit_amount": 100}, "quantity": 2}],
        "skip": None,
    }))
    assert pairs == {
        "mode": "payment",
        "line_items[0][price_data][unit_amount]": "100",
        "line_items[0][quantity]": "2",
    }


async def test_create_session_sends_form_and_auth():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["method"] = request.method
        seen["path"] = request.url.path
        seen["auth"] = request.headers["authorization"]
        seen["form"] = dict(parse_qsl(request.content.decode()))
        return httpx.Response(200, json=SESSION_BODY)

    client = _client(handler)
    session = await _create(client)
    await client.aclose()

    assert seen["method"] == "POST"
    assert seen["path"] == "/v1/checkout/sessions"
    assert seen["auth"] == "Bearer sk_test_fake"
    form = seen["form"]
    assert form["mode"] == "payment"
    assert form["payment_method_types[0]"] == "card"
    assert form["line_items[0][price_data][unit_amount]"] == "12000"
    assert form["line_items[0][quantity]"] == "2"
    assert form["line_items[0][price_data][product_data][name]"] == (
        "Shuttle Booking: Cape Town → Paarl"
    )
    assert session.session_id == "cs_test_a1"
    assert session.url.endswith("cs_test_a1")
    assert session.amount_total == 24000


async def test_card_error_maps_to_upstream_error():
    def handler(request):
        return httpx.Response(402, json={"error": {"message": "Your card was declined."}})

    with pytest.raises(UpstreamError) as exc_info:
        await _create(_client(handler))
    err = exc_info.value
    assert err.upstream_status == 402
    assert err.http_status == 502
    assert "Your card was declined." in err.message


async def test_connection_error_maps_to_upstream_error():
    def handler(request):
        raise httpx.ConnectError("refused", request=request)

    with pytest.raises(UpstreamError) as exc_info:
        await _create(_client(handler))
    assert exc_info.value.upstream_status is None


async def test_timeout_maps_to_504():
    def handler(request):
        raise httpx.ReadTimeout("slow", request=request)

    with pytest.raises(UpstreamError) as exc_info:
        await _create(_client(handler))
    assert exc_info.value.http_status == 504


async def test_non_json_body_is_upstream_error():
    def handler(request):
        return httpx.Response(200, text="<html>oops</html>")

    with pytest.raises(UpstreamError):
        await _create(_client(handler))


async def test_expire_hits_expire_endpoint():
    paths = []

    def handler(request):
        paths.append((request.method, request.url.path))
        return httpx.Response(200, json={**SESSION_BODY, "status": "expired"})

    session = await _client(handler).expire_session("cs_test_a1")
    assert paths == [("POST", "/v1/checkout/sessions/cs_test_a1/expire")]
    assert session.status == "expired"


async def test_retrieve_uses_get():
    paths = []

    def handler(request):
        paths.append((request.method, request.url.path))
        return httpx.Response(200, json={**SESSION_BODY, "status": "complete"})

    session = await _client(handler).retrieve_session("cs_test_a1")
    assert paths == [("GET", "/v1/checkout/sessions/cs_test_a1")]
    assert session.status == "complete"


async def test_missing_key_raises_before_network():
    def handler(request):
        raise AssertionError("network must not be called")

    client = StripeCheckoutClient(None, transport=httpx.MockTransport(handler))
    with pytest.raises(ProviderNotConfiguredError):
        await _create(client)
