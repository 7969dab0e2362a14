"""Use cases for projects and their memberships."""

from __future__ import annotations

import logging
from collections.abc import Sequence

from sqlalchemy.orm import Session

from app.application.errors import ConflictError, NotFoundError, ValidationError
from app.application.use_cases.access import ensure_project_access
from app.application.use_cases.activities import record_activity_safely
from app.application.use_cases.notifications import notify
from app.domain.entities import (
    ActivityType,
    MemberAddedMetadata,
    NotificationType,
    Project,
    ProjectCreatedMetadata,
    ProjectMember,
    Role,
    User,
)
from app.infrastructure.realtime import RealtimePublisher
from app.infrastructure.repositories import ProjectRepository, UserRepository

logger = logging.getLogger(__name__)


def project_link(project_id: int) -> str:
    return f"/projects/{project_id}"


def _clean_name(name: str) -> str:
    name = (name or "").strip()
    if not name:
        raise ValidationError("Name is required", field="name")
    return name


def list_projects(session: Session, user: User) -> Sequence[Project]:
    repository = ProjectRepository(session)
    if user.is_admin():
        return repository.list_all()
    return repository.list_for_member(user.id)


def get_project(session: Session, user: User, project_id: int) -> Project:
    return ensure_project_access(session, user, project_id)


def create_project(
    session: Session,
    user: User,
    *,
    name: str,
    publisher: RealtimePublisher | None = None,
) -> Project:
    """Create a project owned by ``user`` and announce it in the feed."""

    project = ProjectRepository(session).create(_clean_name(name), creator_id=user.id)
    logger.info("User %s created project %s", user.id, project.id)

    if publisher is not None:
        # Admins follow every project, so their live sockets join the new room too.
        for admin_id in {user.id, *UserRepository(session).list_ids_by_role(Role.ADMIN)}:
            publisher.join_project_room(admin_id, project.id)

    record_activity_safely(
        session,
        activity_type=ActivityType.PROJECT_CREATED,
        actor_id=user.id,
        project_id=project.id,
        metadata=ProjectCreatedMetadata(project_name=project.name),
        resource_link=project_link(project.id),
        publisher=publisher,
    )
    return project


def rename_project(session: Session, project_id: int, *, name: str) -> Project:
    project = ProjectRepository(session).rename(project_id, _clean_name(name))
    if project is None:
        raise NotFoundError("Project not found")
    return project


def delete_project(session: Session, project_id: int) -> None:
    """Delete a project together with its vibes, cuts and activity."""

    if not ProjectRepository(session).delete(project_id):
        raise NotFoundError("Project not found")
    logger.info("Deleted project %s", project_id)


def add_project_member(
    session: Session,
    actor: User,
    project_id: int,
    *,
    user_id: int,
    can_create_vibes: bool = True,
    publisher: RealtimePublisher | None = None,
) -> ProjectMember:
    """Add ``user_id`` to the project, notify them and record the change."""

    repository = ProjectRepository(session)
    project = repository.get(project_id)
    if project is None:
        raise NotFoundError("Project not found")
    if UserRepository(session).get(user_id) is None:
        raise NotFoundError("User not found")
    if repository.is_member(project_id, user_id):
        raise ConflictError("User is already a member of this project")

    member = repository.add_member(project_id, user_id, can_create_vibes=can_create_vibes)
    logger.info("User %s added user %s to project %s", actor.id, user_id, project_id)

    try:
        notify(
            session,
            recipient_id=user_id,
            type=NotificationType.SUCCESS,
            title="Added to Project",
            message=f'You have been added to the project "{project.name}".',
            resource_link=project_link(project_id),
            force_email=True,
            publisher=publisher,
        )
    except Exception:
        session.rollback()
        logger.exception("Failed to notify user %s about project %s", user_id, project_id)

    if publisher is not None:
        publisher.join_project_room(user_id, project_id)

    record_activity_safely(
        session,
        activity_type=ActivityType.MEMBER_ADDED,
        actor_id=actor.id,
        project_id=project_id,
        metadata=MemberAddedMetadata(
            member_name=member.user_name or "", project_name=project.name
        ),
        resource_link=project_link(project_id),
        publisher=publisher,
    )
    return member


def remove_project_member(
    session: Session,
    project_id: int,
    *,
    user_id: int,
    publisher: RealtimePublisher | None = None,
) -> None:
    """Drop the membership; the user's feed loses the project immediately."""

    if not ProjectRepository(session).remove_member(project_id, user_id):
        raise NotFoundError("Member not found")
    logger.info("Removed user %s from project %s", user_id, project_id)

    removed = UserRepository(session).get(user_id)
    if publisher is not None and removed is not None and not removed.is_admin():
        publisher.leave_project_room(user_id, project_id)
