"""Use cases for vibes (song concepts inside a project)."""

from __future__ import annotations

import logging
from collections.abc import Sequence

from sqlalchemy.orm import Session

from app.application.errors import ForbiddenError, NotFoundError, ValidationError
from app.application.use_cases.access import ensure_project_access
from app.application.use_cases.activities import record_activity_safely
from app.domain.entities import ActivityType, Project, User, Vibe, VibeCreatedMetadata
from app.infrastructure.realtime import RealtimePublisher
from app.infrastructure.repositories import ProjectRepository, VibeRepository

logger = logging.getLogger(__name__)


def vibe_link(project_id: int, vibe_id: int) -> str:
    return f"/projects/{project_id}/vibes/{vibe_id}"


def list_vibes(session: Session, user: User, project_id: int) -> Sequence[Vibe]:
    ensure_project_access(session, user, project_id)
    return VibeRepository(session).list_by_project(project_id)


def get_vibe(session: Session, user: User, vibe_id: int) -> tuple[Vibe, Project]:
    """Return the vibe and its project once ``user`` may see them."""

    vibe = VibeRepository(session).get(vibe_id)
    if vibe is None:
        raise NotFoundError("Vibe not found")
    project = ensure_project_access(session, user, vibe.project_id)
    return vibe, project


def create_vibe(
    session: Session,
    user: User,
    project_id: int,
    *,
    name: str,
    theme: str | None = None,
    notes: str | None = None,
    publisher: RealtimePublisher | None = None,
) -> Vibe:
    project = ensure_project_access(session, user, project_id)
    if not user.is_admin():
        member = ProjectRepository(session).get_member(project_id, user.id)
        if member is None or not member.can_create_vibes:
            raise ForbiddenError("You are not allowed to create vibes in this project")

    name = (name or "").strip()
    if not name:
        raise ValidationError("Name is required", field="name")

    vibe = VibeRepository(session).create(
        Vibe(id=None, project_id=project_id, name=name, theme=theme, notes=notes)
    )
    logger.info("User %s created vibe %s in project %s", user.id, vibe.id, project_id)

    record_activity_safely(
        session,
        activity_type=ActivityType.VIBE_CREATED,
        actor_id=user.id,
        project_id=project_id,
        metadata=VibeCreatedMetadata(vibe_name=vibe.name, project_name=project.name),
        resource_link=vibe_link(project_id, vibe.id),
        publisher=publisher,
    )
    return vibe
