"""Persistence layer for invitations."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime

from sqlalchemy import or_
from sqlalchemy.orm import Session

from app.domain.entities import Invitation
from app.infrastructure.models import InvitationModel
from app.utils import ensure_app_naive_datetime, ensure_app_timezone


class InvitationRepository:
    """Store invitations; "pending" means not accepted and not yet expired."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def create(self, invitation: Invitation) -> Invitation:
        model = InvitationModel(
            token=invitation.token,
            email=invitation.email,
            name=invitation.name,
            role=invitation.role,
            project_ids=list(invitation.project_ids),
            invited_by_id=invitation.invited_by_id,
            expires_at=ensure_app_naive_datetime(invitation.expires_at),
        )
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def get(self, invitation_id: int) -> Invitation | None:
        model = self.session.get(InvitationModel, invitation_id)
        return self._to_entity(model) if model else None

    def get_by_token(self, token: str) -> Invitation | None:
        model = (
            self.session.query(InvitationModel)
            .filter(InvitationModel.token == token)
            .first()
        )
        return self._to_entity(model) if model else None

    def find_pending_for_email(self, email: str, now: datetime) -> Invitation | None:
        model = self._pending(now).filter(InvitationModel.email == email).first()
        return self._to_entity(model) if model else None

    def list_pending(self, now: datetime) -> Sequence[Invitation]:
        query = self._pending(now).order_by(
            InvitationModel.created_at.desc(), InvitationModel.id.desc()
        )
        return [self._to_entity(model) for model in query.all()]

    def mark_accepted(self, invitation_id: int, when: datetime) -> None:
        model = self.session.get(InvitationModel, invitation_id)
        if model is None:
            return
        model.accepted_at = ensure_app_naive_datetime(when)
        self.session.commit()

    def delete(self, invitation_id: int) -> bool:
        deleted = (
            self.session.query(InvitationModel)
            .filter(InvitationModel.id == invitation_id)
            .delete(synchronize_session=False)
        )
        self.session.commit()
        return bool(deleted)

    def delete_settled(self, now: datetime) -> int:
        """Drop invitations that were accepted or have expired."""

        deleted = (
            self.session.query(InvitationModel)
            .filter(
                or_(
                    InvitationModel.accepted_at.isnot(None),
                    InvitationModel.expires_at <= ensure_app_naive_datetime(now),
                )
            )
            .delete(synchronize_session=False)
        )
        self.session.commit()
        return deleted

    def _pending(self, now: datetime):
        return self.session.query(InvitationModel).filter(
            InvitationModel.accepted_at.is_(None),
            InvitationModel.expires_at > ensure_app_naive_datetime(now),
        )

    @staticmethod
    def _to_entity(model: InvitationModel) -> Invitation:
        inviter = model.invited_by
        return Invitation(
            id=model.id,
            token=model.token,
            email=model.email,
            expires_at=ensure_app_timezone(model.expires_at),
            role=model.role,
            name=model.name,
            project_ids=[int(project_id) for project_id in model.project_ids or []],
            invited_by_id=model.invited_by_id,
            invited_by_name=inviter.name if inviter is not None else None,
            accepted_at=ensure_app_timezone(model.accepted_at),
            created_at=ensure_app_timezone(model.created_at),
        )


__all__ = ["InvitationRepository"]
