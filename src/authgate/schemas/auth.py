"""Pydantic schemas for sign-up, sign-in, sign-out and token refresh.

Learn: JSON field names follow the public API (refreshToken), Python
attribute names stay snake_case. Output models use serialization_alias,
input models use alias so clients send the camelCase name.
"""

from pydantic import BaseModel, EmailStr, Field

from authgate.schemas.user import UserRead

MIN_PASSWORD_LENGTH = 6


class Credentials(BaseModel):
    """Body of /auth/signup. The password policy applies here."""

    email: EmailStr
    password: str = Field(..., min_length=MIN_PASSWORD_LENGTH)


class SignInCredentials(BaseModel):
    """Body of /auth/signin.

    Only non-empty is required: a password that breaks the sign-up policy
    simply cannot match, and is reported as "Invalid credentials".
    """

    email: EmailStr
    password: str = Field(..., min_length=1)


class SignUpResponse(BaseModel):
    user: UserRead


class SignInResponse(BaseModel):
    token: str
    refresh_token: str = Field(serialization_alias="refreshToken")
    user: UserRead


class SignOutResponse(BaseModel):
    message: str


class RefreshRequest(BaseModel):
    refresh_token: str = Field(..., alias="refreshToken", min_length=1)


class TokenPair(BaseModel):
    token: str
    refresh_token: str = Field(serialization_alias="refreshToken")
