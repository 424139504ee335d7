"""Authorization guard tests.

Learn: The guard has two outcomes per request: Authorized (handler runs
with a CurrentIdentity) or Rejected (401). These tests drive every
rejection path through a real protected route.
"""

from datetime import datetime, timedelta, timezone

import jwt
import pytest

from authgate.auth.dependencies import (
    CurrentIdentity,
    authorize,
    extract_bearer_token,
)
from authgate.auth.jwt import TokenIssuer, TokenVerifier
from authgate.config import settings
from authgate.errors import UnauthorizedError
from conftest import signup_and_signin

SIGNOUT = "/api/v1/auth/signout"


def _bearer(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


# ═══════════════════════════════════════════════════════════
# Header parsing
# ═══════════════════════════════════════════════════════════


def test_extract_bearer_token():
    assert extract_bearer_token("Bearer abc.def.ghi") == "abc.def.ghi"
    assert extract_bearer_token("bearer abc") == "abc"


@pytest.mark.parametrize("header", [None, "", "Bearer", "Bearer   ", "Token abc", "abc"])
def test_extract_bearer_token_rejects(header):
    with pytest.raises(UnauthorizedError):
        extract_bearer_token(header)


def test_authorize_returns_identity():
    issuer = TokenIssuer(secret="s" * 32)
    verifier = TokenVerifier(secret="s" * 32)
    token = issuer.issue_access_token("user-1", "a@b.com")

    identity = authorize(f"Bearer {token}", verifier)
    assert identity == CurrentIdentity(user_id="user-1", email="a@b.com")


# ═══════════════════════════════════════════════════════════
# Through the HTTP stack
# ═══════════════════════════════════════════════════════════


@pytest.mark.asyncio
async def test_guard_accepts_signin_token(client):
    tokens = await signup_and_signin(client, "guard@example.com")
    r = await client.post(SIGNOUT, headers=_bearer(tokens["token"]))
    assert r.status_code == 200


@pytest.mark.asyncio
async def test_guard_rejects_missing_header(client):
    r = await client.post(SIGNOUT)
    assert r.status_code == 401
    assert r.headers["WWW-Authenticate"] == "Bearer"


@pytest.mark.asyncio
async def test_guard_rejects_wrong_scheme(client):
    tokens = await signup_and_signin(client, "guard@example.com")
    r = await client.post(SIGNOUT, headers={"Authorization": f"Basic {tokens['token']}"})
    assert r.status_code == 401
    assert r.json()["message"] == "Invalid authorization header format"


@pytest.mark.asyncio
async def test_guard_rejects_foreign_signature(client):
    forged = TokenIssuer(secret="some-other-secret-0123456789abcdef").issue_access_token(
        "user-1", "a@b.com"
    )
    r = await client.post(SIGNOUT, headers=_bearer(forged))
    assert r.status_code == 401
    assert r.json()["message"] == "Invalid token"


@pytest.mark.asyncio
async def test_guard_rejects_tampered_signature(client):
    tokens = await signup_and_signin(client, "guard@example.com")
    header, payload, sig = tokens["token"].split(".")
    sig = ("A" if sig[0] != "A" else "B") + sig[1:]
    tampered = ".".join([header, payload, sig])
    r = await client.post(SIGNOUT, headers=_bearer(tampered))
    assert r.status_code == 401


@pytest.mark.asyncio
async def test_guard_rejects_expired_token(client):
    long_ago = datetime.now(timezone.utc) - timedelta(days=1)
    issuer = TokenIssuer(secret=settings.jwt_secret, clock=lambda: long_ago)
    expired = issuer.issue_access_token("user-1", "a@b.com")

    r = await client.post(SIGNOUT, headers=_bearer(expired))
    assert r.status_code == 401


@pytest.mark.asyncio
async def test_guard_rejects_token_without_claims(client):
    now = datetime.now(timezone.utc)
    no_email = jwt.encode(
        {"sub": "user-1", "iat": now, "exp": now + timedelta(minutes=5)},
        settings.jwt_secret,
        algorithm="HS256",
    )
    r = await client.post(SIGNOUT, headers=_bearer(no_email))
    assert r.status_code == 401


@pytest.mark.asyncio
async def test_guard_rejects_unsigned_token(client):
    now = datetime.now(timezone.utc)
    unsigned = jwt.encode(
        {"sub": "user-1", "email": "a@b.com", "iat": now, "exp": now + timedelta(minutes=5)},
        "",
        algorithm="none",
    )
    r = await client.post(SIGNOUT, headers=_bearer(unsigned))
    assert r.status_code == 401
