"""Use cases for inviting people to BandMate and redeeming invitations."""

from __future__ import annotations

import logging
import secrets
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from datetime import timedelta

from sqlalchemy.orm import Session

from app.application.errors import ConflictError, NotFoundError, ValidationError
from app.application.use_cases.activities import record_activity_safely
from app.application.use_cases.projects import project_link
from app.application.use_cases.users import create_user
from app.config import get_settings
from app.domain.entities import (
    ActivityType,
    Invitation,
    MemberAddedMetadata,
    Project,
    Role,
    User,
)
from app.infrastructure.email import build_resource_url, send_invitation_email
from app.infrastructure.realtime import RealtimePublisher
from app.infrastructure.repositories import (
    InvitationRepository,
    ProjectRepository,
    UserRepository,
)
from app.utils import now_in_app_timezone

logger = logging.getLogger(__name__)


@dataclass
class InvitationPreview:
    """What the invitee sees before accepting."""

    invitation: Invitation
    projects: list[Project]


def invite_link(invitation: Invitation) -> str:
    return build_resource_url(f"/accept-invite?token={invitation.token}")


def _normalize_email(email: str) -> str:
    email = (email or "").strip()
    if "@" not in email:
        raise ValidationError("Invalid email format", field="email")
    return email


def create_invitation(
    session: Session,
    admin: User,
    *,
    email: str,
    name: str | None = None,
    role: Role = Role.MEMBER,
    project_ids: Iterable[int] = (),
) -> Invitation:
    """Create a week-long invitation and e-mail its link.

    Fails when the address already has an account or a pending invitation.
    """

    email = _normalize_email(email)
    if UserRepository(session).get_by_email(email) is not None:
        raise ConflictError("A user with this email already exists")

    repository = InvitationRepository(session)
    now = now_in_app_timezone()
    if repository.find_pending_for_email(email, now) is not None:
        raise ConflictError("An invitation for this email is already pending")

    projects = ProjectRepository(session)
    project_ids = list(dict.fromkeys(project_ids))
    project_names = []
    for project_id in project_ids:
        project = projects.get(project_id)
        if project is None:
            raise NotFoundError(f"Project {project_id} not found")
        project_names.append(project.name)

    invitation = repository.create(
        Invitation(
            id=None,
            token=secrets.token_hex(32),
            email=email,
            name=(name or "").strip() or None,
            role=Role(role),
            project_ids=project_ids,
            invited_by_id=admin.id,
            expires_at=now + timedelta(days=get_settings().invitation_expiry_days),
        )
    )
    logger.info("User %s invited %s (invitation %s)", admin.id, email, invitation.id)

    try:
        send_invitation_email(
            email,
            invite_link(invitation),
            inviter_name=admin.name,
            project_names=project_names,
        )
    except Exception:
        logger.exception("Failed to e-mail invitation %s", invitation.id)
    return invitation


def list_pending_invitations(session: Session) -> Sequence[Invitation]:
    return InvitationRepository(session).list_pending(now_in_app_timezone())


def revoke_invitation(session: Session, invitation_id: int) -> None:
    if not InvitationRepository(session).delete(invitation_id):
        raise NotFoundError("Invitation not found")
    logger.info("Revoked invitation %s", invitation_id)


def _pending_invitation(session: Session, token: str) -> Invitation:
    invitation = InvitationRepository(session).get_by_token(token)
    if invitation is None or not invitation.is_pending(now_in_app_timezone()):
        raise NotFoundError("Invalid or expired invitation")
    return invitation


def preview_invitation(session: Session, token: str) -> InvitationPreview:
    invitation = _pending_invitation(session, token)
    repository = ProjectRepository(session)
    projects = [
        project
        for project in (repository.get(project_id) for project_id in invitation.project_ids)
        if project is not None
    ]
    return InvitationPreview(invitation=invitation, projects=projects)


def accept_invitation(
    session: Session,
    token: str,
    *,
    password: str,
    name: str | None = None,
    publisher: RealtimePublisher | None = None,
) -> User:
    """Create the invitee's account and add them to the invited projects.

    The invitation is spent on success. Projects deleted since the invitation
    was issued are skipped.
    """

    invitation = _pending_invitation(session, token)
    if UserRepository(session).get_by_email(invitation.email) is not None:
        raise ConflictError("An account with this email already exists")

    user = create_user(
        session,
        name=(name or "").strip() or invitation.name or invitation.email.split("@")[0],
        email=invitation.email,
        password=password or "",
        role=invitation.role,
    )
    InvitationRepository(session).mark_accepted(invitation.id, now_in_app_timezone())
    logger.info("Invitation %s accepted by new user %s", invitation.id, user.id)

    projects = ProjectRepository(session)
    for project_id in invitation.project_ids:
        project = projects.get(project_id)
        if project is None or projects.is_member(project_id, user.id):
            continue
        projects.add_member(project_id, user.id, can_create_vibes=True)
        if publisher is not None:
            publisher.join_project_room(user.id, project_id)
        record_activity_safely(
            session,
            activity_type=ActivityType.MEMBER_ADDED,
            actor_id=invitation.invited_by_id or user.id,
            project_id=project_id,
            metadata=MemberAddedMetadata(member_name=user.name, project_name=project.name),
            resource_link=project_link(project_id),
            publisher=publisher,
        )
    return user


def cleanup_settled_invitations(session: Session) -> int:
    """Delete invitations that were accepted or have expired."""

    deleted = InvitationRepository(session).delete_settled(now_in_app_timezone())
    logger.info("Deleted %s settled invitations", deleted)
    return deleted


__all__ = [
    "InvitationPreview",
    "accept_invitation",
    "cleanup_settled_invitations",
    "create_invitation",
    "invite_link",
    "list_pending_invitations",
    "preview_invitation",
    "revoke_invitation",
]
