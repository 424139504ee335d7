"""FastAPI auth dependencies.

Learn: These are used as Depends() in route handlers to gate an operation
behind a valid bearer token. The guard is a predicate: a request either
reaches the handler with a CurrentIdentity, or stops here with a 401.

    Unauthenticated ──valid signature, unexpired, well-formed──▶ Authorized
                   └─missing header / malformed / bad sig / expired──▶ Rejected

Only the shared signing secret is needed, never the database, so
checking a token is read-only and safe to run in parallel.
"""

from dataclasses import dataclass
from typing import Optional

import structlog
from fastapi import Depends, Header

from authgate.auth.jwt import TokenError, TokenVerifier, get_token_verifier
from authgate.errors import UnauthorizedError

logger = structlog.get_logger()


@dataclass(frozen=True)
class CurrentIdentity:
    """The authenticated caller, as asserted by the token."""

    user_id: str
    email: str


def extract_bearer_token(authorization: Optional[str]) -> str:
    """Pull the token out of an `Authorization: Bearer <token>` header."""
    if not authorization:
        raise UnauthorizedError("Authorization header required")
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        raise UnauthorizedError("Invalid authorization header format")
    return token.strip()


def authorize(authorization: Optional[str], verifier: TokenVerifier) -> CurrentIdentity:
    """Run the guard for one request. Raises UnauthorizedError on rejection."""
    token = extract_bearer_token(authorization)
    try:
        claims = verifier.verify(token)
    except TokenError as e:
        logger.debug("auth.token_rejected", reason=str(e))
        raise UnauthorizedError("Invalid token")
    return CurrentIdentity(user_id=claims.sub, email=claims.email)


async def get_current_identity(
    authorization: Optional[str] = Header(None),
    verifier: TokenVerifier = Depends(get_token_verifier),
) -> CurrentIdentity:
    """Extract current identity (required — 401 if no valid token).

    Learn: Add `Depends(get_current_identity)` to a route, or to
    include_router(dependencies=...), to protect it.
    """
    return authorize(authorization, verifier)
