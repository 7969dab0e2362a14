"""Invitation schemas."""

from datetime import datetime

from pydantic import EmailStr, Field

from app.domain.entities import Role

from .base import CamelModel
from .user import UserRead


class InvitationCreate(CamelModel):
    email: EmailStr
    name: str | None = Field(default=None, max_length=100)
    role: Role = Role.MEMBER
    project_ids: list[int] = Field(default_factory=list)


class InviterRead(CamelModel):
    id: int | None = None
    name: str | None = None


class InvitationRead(CamelModel):
    id: int
    email: str
    name: str | None = None
    role: Role
    project_ids: list[int]
    expires_at: datetime
    created_at: datetime | None = None
    invited_by: InviterRead
    invite_link: str


class InvitationCreated(CamelModel):
    invitation: InvitationRead
    invite_link: str


class InvitationList(CamelModel):
    invitations: list[InvitationRead]


class InvitationProjectRead(CamelModel):
    id: int
    name: str


class InvitationPreviewRead(CamelModel):
    email: str
    name: str | None = None
    role: Role
    expires_at: datetime
    invited_by: InviterRead
    projects: list[InvitationProjectRead]


class InvitationAccept(CamelModel):
    password: str = ""
    name: str | None = Field(default=None, max_length=100)


class InvitationAccepted(CamelModel):
    message: str
    user: UserRead
