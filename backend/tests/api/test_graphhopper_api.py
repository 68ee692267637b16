"""GraphHopper API — URL extraction, route CRUD, planning and status."""

from shuttle.core.errors import UpstreamError

MAPS_URL = (
    "https://graphhopper.com/maps/?point=-23.89,29.45_Current+Location"
    "&point=-29.86,31.00_Durban&profile=car"
)


async def test_extract_saves_route(client):
    res = await client.post("/api/graphhopper/extract", json={"url": MAPS_URL})
    assert res.status_code == 201
    body = res.json()
    assert body["message"] == "Route extracted and saved successfully"
    route = body["item"]
    assert route["points"] == ["-23.89,29.45", "-29.86,31.00"]
    assert route["profile"] == "car"

    res = await client.get(f"/api/graphhopper/routes/{route['id']}")
    assert res.json()["item"]["id"] == route["id"]


async def test_extract_needs_two_points(client):
    res = await client.post(
        "/api/graphhopper/extract",
        json={"url": "https://graphhopper.com/maps/?point=-23.89,29.45"},
    )
    assert res.status_code == 400
    assert "at least 2 points" in res.json()["error"]


async def test_create_route_directly(client):
    res = await client.post(
        "/api/graphhopper/routes",
        json={"points": ["-26.2041, 28.0473", "-26.2151,28.0567"], "profile": "bike"},
    )
    assert res.status_code == 201
    item = res.json()["item"]
    assert item["points"] == ["-26.2041,28.0473", "-26.2151,28.0567"]
    assert item["profile"] == "bike"


async def test_create_route_rejects_bad_points(client):
    res = await client.post("/api/graphhopper/routes", json={"points": ["1,1"]})
    assert res.status_code == 400
    res = await client.post("/api/graphhopper/routes", json={"points": ["1,1", "x,y"]})
    assert res.status_code == 400


async def test_update_profile_only(client):
    route = (await client.post(
        "/api/graphhopper/extract", json={"url": MAPS_URL},
    )).json()["item"]
    res = await client.put(
        f"/api/graphhopper/routes/{route['id']}", json={"profile": "foot"},
    )
    item = res.json()["item"]
    assert item["profile"] == "foot"
    assert item["points"] == route["points"]


async def test_plan_with_mock_provider(client):
    route = (await client.post(
        "/api/graphhopper/extract", json={"url": MAPS_URL},
    )).json()["item"]
    res = await client.post(f"/api/graphhopper/routes/{route['id']}/plan")
    assert res.status_code == 200
    item = res.json()["item"]
    assert item["planSource"] == "mock"
    assert item["distance"] > 600_000
    assert item["instructions"][-1]["text"] == "Arrive at destination"

    stored = (await client.get(f"/api/graphhopper/routes/{route['id']}")).json()["item"]
    assert stored["distance"] == item["distance"]


async def test_plan_with_provider(client, fake_routing):
    route = (await client.post(
        "/api/graphhopper/extract", json={"url": MAPS_URL},
    )).json()["item"]
    res = await client.post(f"/api/graphhopper/routes/{route['id']}/plan")
    assert res.json()["item"]["planSource"] == "graphhopper"
    assert fake_routing.calls[0][1] == "car"


async def test_plan_provider_failure_is_502(client, fake_routing):
    fake_routing.error = UpstreamError("graphhopper", "limit exceeded", upstream_status=429)
    route = (await client.post(
        "/api/graphhopper/extract", json={"url": MAPS_URL},
    )).json()["item"]
    res = await client.post(f"/api/graphhopper/routes/{route['id']}/plan")
    assert res.status_code == 502
    assert res.json()["context"] == {"provider": "graphhopper", "upstream_status": 429}


async def test_plan_unknown_route(client):
    res = await client.post("/api/graphhopper/routes/R-NOPE/plan")
    assert res.status_code == 404


async def test_status_reports_count_and_provider(client):
    await client.post("/api/graphhopper/extract", json={"url": MAPS_URL})
    body = (await client.get("/api/graphhopper/status")).json()
    assert body["ok"] is True
    assert body["saved_routes_count"] == 1
    assert body["provider"] == "mock"
