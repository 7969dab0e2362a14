"""Project and membership schemas."""

from datetime import datetime

from pydantic import Field

from .base import CamelModel


class ProjectCreate(CamelModel):
    name: str = Field(..., min_length=1, max_length=200)


class ProjectUpdate(CamelModel):
    name: str = Field(..., min_length=1, max_length=200)


class ProjectMemberRead(CamelModel):
    id: int
    user_id: int
    can_create_vibes: bool
    user_name: str | None = None
    user_email: str | None = None
    joined_at: datetime | None = None


class ProjectRead(CamelModel):
    id: int
    name: str
    created_at: datetime | None = None
    updated_at: datetime | None = None
    members: list[ProjectMemberRead] = Field(default_factory=list)


class ProjectMemberAdd(CamelModel):
    user_id: int = Field(..., ge=1)
    can_create_vibes: bool = True
