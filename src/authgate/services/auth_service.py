"""Auth service — sign-up, sign-in, sign-out and token refresh.

Learn: Service layer separates business logic from HTTP routing.
Collaborators are passed in explicitly (store, token issuer, hasher),
so tests can build an AuthService around any store without a web app.

Credential failures all collapse into one message, "Invalid credentials".
Whether the email is unknown or the password is wrong, the caller sees
the same error, and an unknown email still pays for a bcrypt check so
response time does not give the answer away either.
"""

from typing import Optional

import structlog

from authgate.auth.jwt import REFRESH, TokenError, TokenIssuer, TokenVerifier
from authgate.auth.password import PasswordHasher
from authgate.db.user_store import UserStore
from authgate.errors import ConflictError, UnauthorizedError
from authgate.schemas.auth import (
    Credentials,
    SignInCredentials,
    SignInResponse,
    SignOutResponse,
    SignUpResponse,
    TokenPair,
)
from authgate.schemas.user import UserRead
from authgate.schemas.validation import validate

logger = structlog.get_logger()

INVALID_CREDENTIALS = "Invalid credentials"
SIGNED_OUT = "Successfully signed out"


class AuthService:
    """Business logic for authentication."""

    def __init__(
        self,
        users: UserStore,
        tokens: TokenIssuer,
        hasher: Optional[PasswordHasher] = None,
        verifier: Optional[TokenVerifier] = None,
    ):
        self.users = users
        self.tokens = tokens
        self.hasher = hasher or PasswordHasher()
        self.verifier = verifier or TokenVerifier(
            secret=tokens.secret, algorithm=tokens.algorithm, clock=tokens.clock
        )

    # ─── Sign-up ────────────────────────────────────────

    async def sign_up(self, email: str, password: str) -> SignUpResponse:
        """Create a new identity. ConflictError if the email is taken."""
        creds = validate(Credentials, {"email": email, "password": password})

        if await self.users.get_by_email(creds.email):
            logger.info("auth.signup_conflict")
            raise ConflictError("User already exists")

        password_hash = await self.hasher.hash_async(creds.password)
        # The store re-checks uniqueness; a racing sign-up loses there.
        user = await self.users.create(email=creds.email, password_hash=password_hash)

        logger.info("auth.signup", user_id=str(user.id))
        return SignUpResponse(user=UserRead.model_validate(user))

    # ─── Sign-in ────────────────────────────────────────

    async def sign_in(self, email: str, password: str) -> SignInResponse:
        """Verify credentials and issue an access + refresh token pair."""
        creds = validate(SignInCredentials, {"email": email, "password": password})

        user = await self.users.get_by_email(creds.email)
        if not user:
            # Burn the same bcrypt cost as a real check.
            dummy = await self.hasher.dummy_hash_async()
            await self.hasher.verify_async(creds.password, dummy)
            logger.info("auth.signin_failed")
            raise UnauthorizedError(INVALID_CREDENTIALS)

        if not await self.hasher.verify_async(creds.password, user.password_hash):
            logger.info("auth.signin_failed")
            raise UnauthorizedError(INVALID_CREDENTIALS)

        sub = str(user.id)
        logger.info("auth.signin", user_id=sub)
        return SignInResponse(
            token=self.tokens.issue_access_token(sub, user.email),
            refresh_token=self.tokens.issue_refresh_token(sub, user.email),
            user=UserRead.model_validate(user),
        )

    # ─── Sign-out ───────────────────────────────────────

    async def sign_out(self) -> SignOutResponse:
        """Acknowledge sign-out. Tokens are stateless; the client discards them."""
        return SignOutResponse(message=SIGNED_OUT)

    # ─── Refresh ────────────────────────────────────────

    async def refresh(self, refresh_token: str) -> TokenPair:
        """Exchange a valid refresh token for a fresh token pair."""
        try:
            claims = self.verifier.verify(refresh_token, expected_type=REFRESH)
        except TokenError as e:
            logger.debug("auth.token_rejected", reason=str(e))
            raise UnauthorizedError("Invalid refresh token")

        user = await self.users.get_by_id(claims.sub)
        if not user:
            raise UnauthorizedError("Invalid refresh token")

        sub = str(user.id)
        logger.info("auth.refresh", user_id=sub)
        return TokenPair(
            token=self.tokens.issue_access_token(sub, user.email),
            refresh_token=self.tokens.issue_refresh_token(sub, user.email),
        )
