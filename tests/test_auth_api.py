"""Registration, login, and the protected /api/me endpoint."""

import uuid

import pytest
from sqlalchemy import func, select

from helpers import bearer, register
from lottohist.auth.jwt import get_token_service
from lottohist.db.models import User


def _email(prefix: str) -> str:
    return f"{prefix}-{uuid.uuid4().hex[:8]}@example.com"


# ═══════════════════════════════════════════════════════════
# Registration
# ═══════════════════════════════════════════════════════════


@pytest.mark.asyncio
async def test_register_user(client):
    email = _email("reg")
    r = await client.post("/api/register", json={"email": email, "password": "pw_123456"})
    assert r.status_code == 200
    body = r.json()
    assert body["message"]
    assert body["token"]
    assert body["user"]["email"] == email
    assert isinstance(body["user"]["id"], int)
    assert "password_hash" not in body["user"]


@pytest.mark.asyncio
async def test_register_duplicate_email(client, db_session):
    """Second registration fails and exactly one row exists."""
    email = _email("dup")
    body = {"email": email, "password": "pw_123456"}

    r1 = await client.post("/api/register", json=body)
    assert r1.status_code == 200

    r2 = await client.post("/api/register", json=body)
    assert r2.status_code == 400
    assert r2.json() == {"error": "Email already registered"}

    count = await db_session.scalar(
        select(func.count()).select_from(User).where(User.email == email)
    )
    assert count == 1


@pytest.mark.asyncio
async def test_register_email_is_case_sensitive(client):
    await register(client, email="Player@example.com")
    await register(client, email="player@example.com")


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "body",
    [{}, {"email": "a@example.com"}, {"password": "pw"}, {"email": "", "password": "pw"}],
)
async def test_register_missing_fields(client, body):
    r = await client.post("/api/register", json=body)
    assert r.status_code == 400
    assert r.json() == {"error": "Email and password are required"}


@pytest.mark.asyncio
async def test_register_malformed_body(client):
    r = await client.post(
        "/api/register",
        content=b"{not json",
        headers={"Content-Type": "application/json"},
    )
    assert r.status_code == 400
    assert "error" in r.json()


# ═══════════════════════════════════════════════════════════
# Login
# ═══════════════════════════════════════════════════════════


@pytest.mark.asyncio
async def test_login_success(client):
    email = _email("login")
    _, user = await register(client, email=email, password="my_password_123")

    r = await client.post("/api/login", json={"email": email, "password": "my_password_123"})
    assert r.status_code == 200
    body = r.json()
    assert body["user"] == user
    identity = get_token_service().verify(body["token"])
    assert identity.user_id == user["id"]
    assert identity.email == email


@pytest.mark.asyncio
async def test_login_failures_are_indistinguishable(client):
    """Wrong password and unknown email give the same status and body."""
    email = _email("wrong")
    await register(client, email=email, password="correct_password")

    wrong_pw = await client.post("/api/login", json={"email": email, "password": "nope"})
    unknown = await client.post(
        "/api/login", json={"email": _email("nobody"), "password": "correct_password"}
    )

    assert wrong_pw.status_code == unknown.status_code == 400
    assert wrong_pw.json() == unknown.json() == {"error": "Invalid email or password"}


@pytest.mark.asyncio
async def test_login_missing_fields(client):
    r = await client.post("/api/login", json={"email": "x@example.com"})
    assert r.status_code == 400
    assert r.json() == {"error": "Email and password are required"}


# ═══════════════════════════════════════════════════════════
# Protected Endpoint (/api/me)
# ═══════════════════════════════════════════════════════════


@pytest.mark.asyncio
async def test_me_with_token(client):
    email = _email("me")
    token, user = await register(client, email=email)

    r = await client.get("/api/me", headers=bearer(token))
    assert r.status_code == 200
    me = r.json()["user"]
    assert set(me) == {"id", "email", "created_at"}
    assert me["id"] == user["id"]
    assert me["email"] == email


@pytest.mark.asyncio
async def test_me_without_token(client):
    r = await client.get("/api/me")
    assert r.status_code == 401
    assert r.headers["WWW-Authenticate"] == "Bearer"
    assert "error" in r.json()


@pytest.mark.asyncio
async def test_me_with_wrong_scheme(client):
    token, _ = await register(client, email=_email("scheme"))
    r = await client.get("/api/me", headers={"Authorization": f"Token {token}"})
    assert r.status_code == 401


@pytest.mark.asyncio
async def test_me_with_tampered_token(client):
    token, _ = await register(client, email=_email("tamper"))
    header, payload, signature = token.split(".")
    tampered = f"{header}.{payload}.{signature[:-4]}AAAA"

    r = await client.get("/api/me", headers=bearer(tampered))
    assert r.status_code == 401


@pytest.mark.asyncio
async def test_me_with_garbage_token(client):
    r = await client.get("/api/me", headers=bearer("invalid_token_here"))
    assert r.status_code == 401


@pytest.mark.asyncio
async def test_me_user_vanished(client):
    """A valid token for a user that no longer exists gets 404."""
    token = get_token_service().issue(987654, "ghost@example.com")
    r = await client.get("/api/me", headers=bearer(token))
    assert r.status_code == 404
    assert r.json() == {"error": "User not found"}
