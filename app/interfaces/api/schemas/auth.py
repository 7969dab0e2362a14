"""Authentication related schemas."""

from pydantic import EmailStr, Field

from app.domain.entities import Role

from .base import CamelModel


class LoginRequest(CamelModel):
    email: EmailStr
    password: str = Field(..., min_length=1)


class SessionUser(CamelModel):
    id: int
    email: EmailStr
    name: str
    role: Role


class LoginResponse(CamelModel):
    user: SessionUser
    access_token: str


class RefreshRequest(CamelModel):
    refresh_token: str | None = Field(
        default=None, description="Falls back to the refresh_token cookie"
    )


class RefreshResponse(CamelModel):
    access_token: str
