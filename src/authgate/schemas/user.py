"""Pydantic schemas for users.

Learn: Separate "Create" schemas (input) from "Read" schemas (output).
UserRead is the only outward view of an identity: it has no
password_hash field, so the hash cannot leak through a response.
"""

import uuid
from typing import Optional

from pydantic import BaseModel, EmailStr, Field, field_validator

MAX_PAGE_SIZE = 100


class UserCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    email: EmailStr


class UserRead(BaseModel):
    id: uuid.UUID
    name: str = ""
    email: str

    model_config = {"from_attributes": True}

    @field_validator("name", mode="before")
    @classmethod
    def _name_never_null(cls, v: Optional[str]) -> str:
        return v or ""


class ListParams(BaseModel):
    page: int = Field(1, ge=1)
    limit: int = Field(10, ge=1, le=MAX_PAGE_SIZE)


class UserList(BaseModel):
    data: list[UserRead]
    total: int
    page: int
    limit: int
    total_pages: int = Field(serialization_alias="totalPages")
