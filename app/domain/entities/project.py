"""Domain entities describing projects and their members."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime


@dataclass
class ProjectMember:
    """Membership of a user inside a project."""

    id: int | None
    project_id: int
    user_id: int
    can_create_vibes: bool = True
    user_name: str | None = None
    user_email: str | None = None
    joined_at: datetime | None = None


@dataclass
class Project:
    """Top-level collaboration workspace."""

    id: int | None
    name: str
    created_at: datetime | None = None
    updated_at: datetime | None = None
    members: list[ProjectMember] = field(default_factory=list)

    def member_ids(self) -> set[int]:
        return {member.user_id for member in self.members}


__all__ = ["Project", "ProjectMember"]
