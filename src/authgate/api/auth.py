"""Auth API — sign-up, sign-in, sign-out, token refresh.

Learn: Routes for the credential lifecycle:
- POST /auth/signup → create a new identity
- POST /auth/signin → email/password → JWT tokens
- POST /auth/signout → stateless acknowledgement (requires a token)
- POST /auth/refresh → refresh token → new token pair
"""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from authgate.auth.dependencies import CurrentIdentity, get_current_identity
from authgate.auth.jwt import (
    TokenIssuer,
    TokenVerifier,
    get_token_issuer,
    get_token_verifier,
)
from authgate.auth.password import PasswordHasher
from authgate.config import settings
from authgate.db.engine import get_db
from authgate.db.user_store import UserStore
from authgate.schemas.auth import (
    Credentials,
    RefreshRequest,
    SignInCredentials,
    SignInResponse,
    SignOutResponse,
    SignUpResponse,
    TokenPair,
)
from authgate.services.auth_service import AuthService

router = APIRouter(prefix="/auth")


def _svc(
    db: AsyncSession = Depends(get_db),
    issuer: TokenIssuer = Depends(get_token_issuer),
    verifier: TokenVerifier = Depends(get_token_verifier),
) -> AuthService:
    return AuthService(
        users=UserStore(db),
        tokens=issuer,
        hasher=PasswordHasher(rounds=settings.bcrypt_rounds),
        verifier=verifier,
    )


@router.post("/signup", response_model=SignUpResponse, status_code=201)
async def sign_up(body: Credentials, svc: AuthService = Depends(_svc)):
    """Create a new user account."""
    return await svc.sign_up(body.email, body.password)


@router.post("/signin", response_model=SignInResponse)
async def sign_in(body: SignInCredentials, svc: AuthService = Depends(_svc)):
    """Sign in with email and password → JWT tokens."""
    return await svc.sign_in(body.email, body.password)


@router.post("/signout", response_model=SignOutResponse)
async def sign_out(
    identity: CurrentIdentity = Depends(get_current_identity),
    svc: AuthService = Depends(_svc),
):
    """Sign out. The server keeps no session; the client drops its tokens."""
    return await svc.sign_out()


@router.post("/refresh", response_model=TokenPair)
async def refresh(body: RefreshRequest, svc: AuthService = Depends(_svc)):
    """Exchange a refresh token for a new token pair."""
    return await svc.refresh(body.refresh_token)
