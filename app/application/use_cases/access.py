"""Capability checks shared by every project-scoped flow."""

from __future__ import annotations

from sqlalchemy.orm import Session

from app.application.errors import ForbiddenError, NotFoundError
from app.domain.entities import Project, User
from app.infrastructure.repositories import ProjectRepository


def can_access_project(session: Session, user: User, project_id: int) -> bool:
    """Return ``True`` when ``user`` may act on ``project_id``.

    Administrators may act on every project; members only on the projects they
    belong to at the time of the call.
    """

    if user.is_admin():
        return True
    return ProjectRepository(session).is_member(project_id, user.id)


def ensure_project_access(session: Session, user: User, project_id: int) -> Project:
    """Return the project or raise when it is missing or out of reach."""

    project = ProjectRepository(session).get(project_id)
    if project is None:
        raise NotFoundError("Project not found")
    if not can_access_project(session, user, project_id):
        raise ForbiddenError("You do not have access to this project")
    return project


def visible_project_ids(session: Session, user: User) -> list[int] | None:
    """Return the projects whose activity ``user`` may see.

    ``None`` stands for every project.
    """

    if user.is_admin():
        return None
    return ProjectRepository(session).list_member_project_ids(user.id)


__all__ = ["can_access_project", "ensure_project_access", "visible_project_ids"]
