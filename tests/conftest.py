"""Test fixtures — a fresh in-memory database per test.

Learn: Testing pattern for async SQLAlchemy + FastAPI:

1. Each test gets its own in-memory SQLite engine (aiosqlite). build_engine()
   pins it to a StaticPool, which keeps a single connection alive, so
   every session in the test sees the same database.
2. Tables are created from the ORM metadata, then thrown away with the
   engine after the test. No cross-test pollution.
3. The app's get_db dependency is overridden to hand out sessions bound
   to that engine.

Environment is set before anything imports authgate.config, because the
settings singleton is read once at import.
"""

import os

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite://")
os.environ.setdefault("JWT_SECRET", "test-signing-secret-0123456789abcdef")
os.environ.setdefault("ENVIRONMENT", "development")
# Minimum bcrypt cost keeps the suite fast; production default is 10.
os.environ.setdefault("BCRYPT_ROUNDS", "4")

import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from authgate.db.engine import (  # noqa: E402
    build_engine,
    build_session_factory,
    get_db,
)
from authgate.db.models import Base  # noqa: E402
from authgate.main import app  # noqa: E402

TEST_DB_URL = "sqlite+aiosqlite://"


@pytest_asyncio.fixture()
async def db_engine():
    """Per-test in-memory database with the schema created."""
    engine = build_engine(TEST_DB_URL)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    try:
        yield engine
    finally:
        await engine.dispose()


@pytest_asyncio.fixture()
async def session_factory(db_engine):
    return build_session_factory(db_engine)


@pytest_asyncio.fixture()
async def db_session(session_factory):
    """A session for arranging data or asserting on it directly."""
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture()
async def client(session_factory):
    """HTTP client with the app's get_db pointed at the test database.

    Learn: Auth is NOT mocked. Protected routes need a real token, so
    tests sign up and sign in exactly like a client would.
    """
    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


async def signup_and_signin(client, email: str, password: str = "secret1") -> dict:
    """Register EMAIL and return the sign-in response body."""
    r = await client.post("/api/v1/auth/signup", json={"email": email, "password": password})
    assert r.status_code == 201, r.text
    r = await client.post("/api/v1/auth/signin", json={"email": email, "password": password})
    assert r.status_code == 200, r.text
    return r.json()
