"""Error shape tests for failures outside the domain layer.

Learn: Storage failures must come back as a generic 500 that says
nothing about the database. Routing errors use the same body shape as
everything else.
"""

import pytest
from sqlalchemy.exc import OperationalError

from authgate.db.engine import get_db
from authgate.main import app


class _BrokenSession:
    """Stands in for a session whose connection has gone away."""

    async def execute(self, *args, **kwargs):
        raise OperationalError("SELECT 1", {}, Exception("connection refused"))

    async def get(self, *args, **kwargs):
        raise OperationalError("SELECT users", {}, Exception("connection refused"))


async def _broken_db():
    yield _BrokenSession()


@pytest.mark.asyncio
async def test_storage_failure_is_generic_500(client):
    app.dependency_overrides[get_db] = _broken_db

    r = await client.get("/api/v1/users")
    assert r.status_code == 500
    assert r.json() == {"message": "Internal server error", "statusCode": 500}
    assert "connection refused" not in r.text


@pytest.mark.asyncio
async def test_health_reports_degraded_database(client):
    app.dependency_overrides[get_db] = _broken_db

    r = await client.get("/api/v1/health")
    assert r.status_code == 200
    body = r.json()
    assert body["status"] == "degraded"
    assert body["server"] == "ok"
    assert body["database"].startswith("error")


@pytest.mark.asyncio
async def test_unknown_route_shape(client):
    r = await client.get("/api/v1/nothing-here")
    assert r.status_code == 404
    assert r.json() == {"message": "Not Found", "statusCode": 404}


@pytest.mark.asyncio
async def test_method_not_allowed_shape(client):
    r = await client.delete("/api/v1/users")
    assert r.status_code == 405
    assert r.json()["statusCode"] == 405


@pytest.mark.asyncio
async def test_malformed_json_body(client):
    r = await client.post(
        "/api/v1/auth/signup",
        content=b"{not json",
        headers={"Content-Type": "application/json"},
    )
    assert r.status_code == 400
    assert r.json()["message"] == "Validation failed"
