"""User schemas."""

from datetime import datetime

from pydantic import EmailStr, Field

from app.domain.entities import Role

from .base import CamelModel


class UserCreate(CamelModel):
    name: str = Field(..., min_length=1, max_length=100)
    email: EmailStr
    password: str | None = Field(
        default=None,
        min_length=8,
        description="Generated and e-mailed to the user when omitted",
    )
    role: Role = Role.MEMBER


class UserRead(CamelModel):
    id: int
    name: str
    email: EmailStr
    role: Role
    avatar_url: str | None = None
    last_login: datetime | None = None
    created_at: datetime | None = None
