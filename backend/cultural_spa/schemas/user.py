"""
Pydantic schemas for accounts, credentials and session tokens.
"""

from datetime import datetime
from typing import Annotated, Literal, Optional

from pydantic import AfterValidator, Field, StringConstraints

from cultural_spa.core.security import MAX_PASSWORD_BYTES
from cultural_spa.schemas.common import APIModel

# Normalized before the length check: "  Alice " -> "alice"
Username = Annotated[
    str,
    StringConstraints(strip_whitespace=True, to_lower=True, min_length=3, max_length=32),
]


def _within_bcrypt_limit(value: str) -> str:
    if len(value.encode("utf-8")) > MAX_PASSWORD_BYTES:
        raise ValueError(f"Password must be at most {MAX_PASSWORD_BYTES} bytes")
    return value


# Passwords that get hashed: bcrypt refuses input over 72 bytes
Password = Annotated[str, Field(min_length=6, max_length=72), AfterValidator(_within_bcrypt_limit)]
# Passwords that are only checked; an oversized one simply fails to verify
LoginPassword = Annotated[str, Field(min_length=6, max_length=72)]
Role = Literal["user", "admin"]


class Credentials(APIModel):
    username: Username
    password: Password


class LoginCredentials(APIModel):
    username: Username
    password: LoginPassword


class UserPublic(APIModel):
    id: int
    username: str
    role: str


class UserProfile(UserPublic):
    created_at: datetime


class AuthResponse(APIModel):
    access_token: str
    user: UserPublic


class PasswordChange(APIModel):
    current_password: str = Field(..., min_length=1, max_length=72)
    new_password: Password


class UserCreate(APIModel):
    username: Username
    password: Password
    role: Role = "user"


class UserUpdate(APIModel):
    role: Optional[Role] = None
    password: Optional[Password] = None
