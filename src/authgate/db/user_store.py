"""User store — persistence for identity records.

Learn: Repository pattern. Services never build SQL; they ask the store
for users by email or id. The store is also where the one-user-per-email
invariant is enforced: the UNIQUE constraint on users.email rejects the
loser of a concurrent sign-up race, and that IntegrityError is turned
into a ConflictError here.
"""

import uuid
from typing import Optional

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from authgate.db.models import User
from authgate.errors import ConflictError


class UserStore:
    """Async repository for User rows, scoped to one session."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_by_email(self, email: str) -> Optional[User]:
        result = await self.db.execute(select(User).where(User.email == email))
        return result.scalars().first()

    async def get_by_id(self, user_id: str | uuid.UUID) -> Optional[User]:
        """Look up by id. A malformed id simply matches nothing."""
        if not isinstance(user_id, uuid.UUID):
            try:
                user_id = uuid.UUID(str(user_id))
            except ValueError:
                return None
        return await self.db.get(User, user_id)

    async def create(
        self, email: str, password_hash: str, name: Optional[str] = None
    ) -> User:
        """Insert a user and commit. Raises ConflictError if the email exists."""
        user = User(email=email, name=name, password_hash=password_hash)
        self.db.add(user)
        try:
            await self.db.commit()
        except IntegrityError:
            await self.db.rollback()
            raise ConflictError("User already exists")
        await self.db.refresh(user)
        return user

    async def count(self) -> int:
        result = await self.db.execute(select(func.count()).select_from(User))
        return result.scalar_one()

    async def list_page(self, offset: int, limit: int) -> list[User]:
        """Newest first."""
        result = await self.db.execute(
            select(User)
            .order_by(User.created_at.desc(), User.id)
            .offset(offset)
            .limit(limit)
        )
        return list(result.scalars().all())
