"""Users API — signup, duplicate rejection, login by email, /me."""

SIGNUP = {
    "username": "lerato",
    "email": "lerato@example.com",
    "password": "s3cret-pass",
    "role": "passenger",
    "name": "Lerato Dlamini",
}


async def test_signup_returns_public_user(client):
    res = await client.post("/users/signup", json=SIGNUP)
    assert res.status_code == 201
    user = res.json()["user"]
    assert user["id"].startswith("USR-")
    assert user["name"] == "Lerato Dlamini"
    assert "password" not in user
    assert "passwordHash" not in user


async def test_signup_missing_fields(client):
    res = await client.post("/users/signup", json={"username": "lerato"})
    assert res.status_code == 400
    assert res.json()["details"]["fields"] == ["email", "password", "role"]


async def test_signup_duplicate_email(client):
    await client.post("/users/signup", json=SIGNUP)
    res = await client.post("/users/signup", json={**SIGNUP, "username": "other"})
    assert res.status_code == 409
    assert res.json()["code"] == "DUPLICATE_RECORD"


async def test_signup_duplicate_seeded_username(client):
    res = await client.post(
        "/users/signup", json={**SIGNUP, "username": "thabiso"},
    )
    assert res.status_code == 409


async def test_login_by_email_then_me(client):
    created = (await client.post("/users/signup", json=SIGNUP)).json()["user"]
    res = await client.post(
        "/users/login",
        json={"username": "lerato@example.com", "password": "s3cret-pass"},
    )
    assert res.status_code == 200
    body = res.json()
    assert body["user"] == created

    res = await client.get(
        "/users/me", headers={"Authorization": f"Bearer {body['token']}"},
    )
    assert res.status_code == 200
    assert res.json()["user"] == created


async def test_seeded_user_can_log_in(client):
    res = await client.post(
        "/users/login", json={"username": "thabiso", "password": "123456"},
    )
    assert res.json()["user"]["role"] == "passenger"


async def test_login_wrong_password(client):
    res = await client.post(
        "/users/login", json={"username": "thabiso", "password": "nope"},
    )
    assert res.status_code == 401
    assert res.json()["error"] == "Invalid password"


async def test_me_requires_valid_token(client):
    res = await client.get("/users/me")
    assert res.status_code == 401
    assert res.json()["error"] == "Missing token"

    res = await client.get("/users/me", headers={"Authorization": "Bearer junk"})
    assert res.status_code == 401
    assert res.json()["error"] == "Invalid token"


async def test_api_token_is_not_a_user_token(client, auth_headers):
    res = await client.get("/users/me", headers=auth_headers)
    assert res.status_code == 401
