"""Health endpoint tests."""

import pytest

from authgate import __version__


@pytest.mark.asyncio
async def test_health_returns_ok(client):
    """Health endpoint should return server status and version."""
    resp = await client.get("/api/v1/health")
    assert resp.status_code == 200
    data = resp.json()
    assert data["status"] == "healthy"
    assert data["server"] == "ok"
    assert data["database"] == "ok"
    assert data["version"] == __version__
    assert data["apiVersion"] == "v1"


@pytest.mark.asyncio
async def test_health_is_public(client):
    """No Authorization header needed."""
    resp = await client.get("/api/v1/health", headers={"Authorization": "Bearer junk"})
    assert resp.status_code == 200
