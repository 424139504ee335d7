"""JWT token creation and verification.

Learn: JWT (JSON Web Token) provides stateless authentication.
- Access token: short-lived (15min default), used for API calls
- Refresh token: 7 days, used to get new access tokens

Both carry the same claim set: sub (user id) and email, plus a "type"
marker, iat and exp. Nothing is stored server-side, so a token stays
valid until its exp no matter what happens to the account afterwards.
"""

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Callable, Optional

import jwt

from authgate.config import settings

ACCESS = "access"
REFRESH = "refresh"

Clock = Callable[[], datetime]


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class TokenError(Exception):
    """Raised when token verification fails."""


@dataclass(frozen=True)
class TokenClaims:
    """Decoded identity carried by a token."""

    sub: str
    email: str
    type: str
    issued_at: datetime
    expires_at: datetime


class TokenIssuer:
    """Mints signed, time-bounded access and refresh tokens."""

    def __init__(
        self,
        secret: str,
        algorithm: str = "HS256",
        access_ttl: timedelta = timedelta(minutes=15),
        refresh_ttl: timedelta = timedelta(days=7),
        clock: Clock = utcnow,
    ):
        self.secret = secret
        self.algorithm = algorithm
        self.access_ttl = access_ttl
        self.refresh_ttl = refresh_ttl
        self.clock = clock

    def issue_access_token(self, sub: str, email: str) -> str:
        """Create a JWT access token."""
        return self._encode(sub, email, ACCESS, self.access_ttl)

    def issue_refresh_token(self, sub: str, email: str) -> str:
        """Create a JWT refresh token."""
        return self._encode(sub, email, REFRESH, self.refresh_ttl)

    def _encode(self, sub: str, email: str, token_type: str, ttl: timedelta) -> str:
        now = self.clock()
        payload = {
            "sub": sub,
            "email": email,
            "type": token_type,
            "iat": now,
            "exp": now + ttl,
        }
        return jwt.encode(payload, self.secret, algorithm=self.algorithm)


class TokenVerifier:
    """Checks signature, shape and expiry of an inbound token."""

    def __init__(self, secret: str, algorithm: str = "HS256", clock: Clock = utcnow):
        self.secret = secret
        self.algorithm = algorithm
        self.clock = clock

    def verify(self, token: str, expected_type: Optional[str] = None) -> TokenClaims:
        """Verify and decode a JWT token.

        Returns the claims on success. Raises TokenError on failure.
        A token whose exp equals the current second is already expired.
        """
        try:
            payload = jwt.decode(
                token,
                self.secret,
                algorithms=[self.algorithm],
                # exp is compared against self.clock below
                options={
                    "verify_exp": False,
                    "verify_iat": False,
                    "require": ["sub", "exp", "iat"],
                },
            )
        except jwt.InvalidTokenError as e:
            raise TokenError(f"Invalid token: {e}")

        sub = payload.get("sub")
        email = payload.get("email")
        token_type = payload.get("type", ACCESS)
        exp = payload.get("exp")
        iat = payload.get("iat")
        if not isinstance(sub, str) or not sub or not isinstance(email, str):
            raise TokenError("Invalid token: malformed claims")
        if not isinstance(exp, (int, float)) or not isinstance(iat, (int, float)):
            raise TokenError("Invalid token: malformed claims")

        if exp <= self.clock().timestamp():
            raise TokenError("Token has expired")
        if expected_type and token_type != expected_type:
            raise TokenError(f"Not a {expected_type} token")

        return TokenClaims(
            sub=sub,
            email=email,
            type=token_type,
            issued_at=datetime.fromtimestamp(iat, tz=timezone.utc),
            expires_at=datetime.fromtimestamp(exp, tz=timezone.utc),
        )


def get_token_issuer() -> TokenIssuer:
    """Issuer built from process-wide settings."""
    return TokenIssuer(
        secret=settings.jwt_secret,
        algorithm=settings.jwt_algorithm,
        access_ttl=timedelta(minutes=settings.access_token_expire_minutes),
        refresh_ttl=timedelta(days=settings.refresh_token_expire_days),
    )


def get_token_verifier() -> TokenVerifier:
    """Verifier built from process-wide settings."""
    return TokenVerifier(secret=settings.jwt_secret, algorithm=settings.jwt_algorithm)
