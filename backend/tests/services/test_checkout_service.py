"""Checkout Service — provider calls around registry bookkeeping.

Invariants:
    - Invalid input never reaches the provider
    - Provider failure leaves the registry empty
    - unit_amount = price in cents (half up) per seat, quantity = seats
"""

import pytest

from shuttle.core.errors import (
    RecordValidationError,
    ResourceNotFoundError,
    UpstreamError,
)
from shuttle.services.checkout_service import CheckoutService
from shuttle.services.resource_catalog import build_catalog

from tests.fakes import FakePayments

VALID = {
    "shuttleId": "SHTL-001",
    "shuttleRoute": "Cape Town → Paarl",
    "seats": 2,
    "price": 120.5,
    "userId": "USR-001",
    "userName": "Thabiso Mapoulo",
}


@pytest.fixture
def payments():
    return FakePayments()


@pytest.fixture
def service(payments):
    catalog = build_catalog(seed_demo_data=False)
    return CheckoutService(
        catalog.checkout_sessions, payments, currency="zar",
        success_url="https://s", cancel_url="https://c",
    )


async def test_create_records_provider_session(service, payments):
    record = await service.create_session(dict(VALID))

    assert record["sessionId"] == "cs_test_001"
    assert record["status"] == "open"
    assert record["amountTotal"] == 24100
    assert record["currency"] == "zar"
    assert record["userName"] == "Thabiso Mapoulo"
    assert service.registry.get("cs_test_001")["url"].endswith("cs_test_001")

    _, kwargs = payments.calls[0]
    item = kwargs["line_items"][0]
    assert item.name == "Shuttle Booking: Cape Town → Paarl"
    assert item.description == "Car ID: SHTL-001, Seats: 2"
    assert item.unit_amount == 12050
    assert item.quantity == 2
    assert kwargs["success_url"] == "https://s"


@pytest.mark.parametrize("price,cents", [
    (0.125, 13), (12.125, 1213), (19.995, 2000), (120.5, 12050), (7, 700),
])
async def test_half_cents_round_up(service, payments, price, cents):
    await service.create_session({**VALID, "price": price})
    _, kwargs = payments.calls[0]
    assert kwargs["line_items"][0].unit_amount == cents


async def test_missing_fields_never_call_provider(service, payments):
    fields = {k: v for k, v in VALID.items() if k != "userName"}
    with pytest.raises(RecordValidationError) as exc_info:
        await service.create_session(fields)
    assert exc_info.value.missing_fields == ["userName"]
    assert payments.calls == []


async def test_non_positive_seats_rejected(service, payments):
    with pytest.raises(RecordValidationError) as exc_info:
        await service.create_session({**VALID, "seats": 0})
    assert exc_info.value.missing_fields == ["seats"]
    assert payments.calls == []


async def test_provider_failure_records_nothing(service, payments):
    payments.error = UpstreamError("stripe", "declined", upstream_status=402)
    with pytest.raises(UpstreamError):
        await service.create_session(dict(VALID))
    assert service.registry.list() == []


async def test_refresh_merges_remote_status(service, payments):
    await service.create_session(dict(VALID))
    payments.status = "complete"
    record = await service.refresh_session("cs_test_001")
    assert record["status"] == "complete"
    assert record["paymentStatus"] == "paid"
    assert "updatedAt" in record


async def test_cancel_expires_remote_session(service, payments):
    await service.create_session(dict(VALID))
    record = await service.cancel_session("cs_test_001")
    assert record["status"] == "expired"
    assert payments.calls[-1] == ("expire", {"session_id": "cs_test_001"})


async def test_cancel_unknown_session_skips_provider(service, payments):
    with pytest.raises(ResourceNotFoundError):
        await service.cancel_session("cs_missing")
    assert payments.calls == []
