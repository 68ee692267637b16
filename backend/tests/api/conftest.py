"""API test fixtures — isolated app per test + httpx ASGI client.

Invariants:
    - Every test gets a fresh app (fresh registries, demo cars and users seeded)
    - Collaborators replaced via app.dependency_overrides, never the network
    - auth_headers logs in through the real /api-security/login route
    - Collaborator HTTP pools closed on teardown (ASGI transport skips lifespan)
"""

import pytest
from httpx import ASGITransport, AsyncClient

from shuttle.api.dependencies import get_payment_client, get_routing_client
from shuttle.config import Settings
from shuttle.main import close_clients, create_app

from tests.fakes import FakePayments, FakeRouting


@pytest.fixture
def settings():
    return Settings(
        auth_enabled=True,
        seed_demo_data=True,
        stripe_secret_key=None,
        graphhopper_api_key=None,
        password_hash_rounds=4,
        log_format="text",
    )


@pytest.fixture
async def app(settings):
    application = create_app(settings)
    yield application
    application.dependency_overrides.clear()
    await close_clients(application)


@pytest.fixture
async def client(app):
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c


@pytest.fixture
async def auth_headers(client):
    res = await client.post(
        "/api-security/login",
        json={"username": "API-SPECIALIST", "password": "secure123"},
    )
    assert res.status_code == 200
    return {"Authorization": res.json()["token"]}


@pytest.fixture
def fake_payments(app):
    fake = FakePayments()
    app.dependency_overrides[get_payment_client] = lambda: fake
    return fake


@pytest.fixture
def fake_routing(app):
    fake = FakeRouting()
    app.dependency_overrides[get_routing_client] = lambda: fake
    return fake
