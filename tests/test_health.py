"""Liveness and health endpoints."""

import pytest


@pytest.mark.asyncio
async def test_liveness(client):
    r = await client.get("/")
    assert r.status_code == 200
    assert r.json() == {"status": "ok"}


@pytest.mark.asyncio
async def test_health(client):
    r = await client.get("/api/health")
    assert r.status_code == 200
    body = r.json()
    assert body["status"] == "healthy"
    assert body["database"] == "ok"
    assert "version" in body
