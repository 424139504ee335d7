"""User API routes.

Learn: Listing and creating users is open; reading a single user needs a
valid bearer token. Any valid token will do, there is no per-user
ownership check.
"""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from authgate.auth.dependencies import get_current_identity
from authgate.auth.password import PasswordHasher
from authgate.config import settings
from authgate.db.engine import get_db
from authgate.db.user_store import UserStore
from authgate.schemas.user import MAX_PAGE_SIZE, UserCreate, UserList, UserRead
from authgate.services.user_service import UserService

router = APIRouter(prefix="/users")


def _svc(db: AsyncSession = Depends(get_db)) -> UserService:
    return UserService(UserStore(db), PasswordHasher(rounds=settings.bcrypt_rounds))


@router.get("", response_model=UserList)
async def list_users(
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=MAX_PAGE_SIZE),
    svc: UserService = Depends(_svc),
):
    return await svc.list_users(page=page, limit=limit)


@router.post("", response_model=UserRead, status_code=201)
async def create_user(body: UserCreate, svc: UserService = Depends(_svc)):
    return await svc.create_user(name=body.name, email=body.email)


@router.get(
    "/{user_id}",
    response_model=UserRead,
    dependencies=[Depends(get_current_identity)],
)
async def get_user(user_id: str, svc: UserService = Depends(_svc)):
    return await svc.get_user(user_id)
