"""User service — plain user creation, listing and lookup.

Learn: Users created through POST /users never chose a password. They get
DEFAULT_SEED_PASSWORD (hashed) so the row satisfies the schema. That is a
development placeholder kept for API compatibility; anyone who
knows it can sign in as such a user, so do not expose this endpoint in
production without replacing the seeding strategy.
"""

import math
import uuid
from typing import Optional

import structlog

from authgate.auth.password import PasswordHasher
from authgate.db.user_store import UserStore
from authgate.errors import NotFoundError
from authgate.schemas.user import ListParams, UserCreate, UserList, UserRead
from authgate.schemas.validation import validate

logger = structlog.get_logger()

# Insecure development default, see module docstring.
DEFAULT_SEED_PASSWORD = "default-password"


class UserService:
    """Business logic for user records."""

    def __init__(self, users: UserStore, hasher: Optional[PasswordHasher] = None):
        self.users = users
        self.hasher = hasher or PasswordHasher()

    async def create_user(self, name: str, email: str) -> UserRead:
        body = validate(UserCreate, {"name": name, "email": email})
        password_hash = await self.hasher.hash_async(DEFAULT_SEED_PASSWORD)
        user = await self.users.create(
            email=body.email, password_hash=password_hash, name=body.name
        )
        logger.info("users.created", user_id=str(user.id))
        return UserRead.model_validate(user)

    async def list_users(self, page: int = 1, limit: int = 10) -> UserList:
        """One page of users, newest first."""
        params = validate(ListParams, {"page": page, "limit": limit})
        offset = (params.page - 1) * params.limit

        total = await self.users.count()
        users = await self.users.list_page(offset=offset, limit=params.limit)

        return UserList(
            data=[UserRead.model_validate(u) for u in users],
            total=total,
            page=params.page,
            limit=params.limit,
            total_pages=math.ceil(total / params.limit),
        )

    async def get_user(self, user_id: str | uuid.UUID) -> UserRead:
        user = await self.users.get_by_id(user_id)
        if not user:
            raise NotFoundError("User not found")
        return UserRead.model_validate(user)
