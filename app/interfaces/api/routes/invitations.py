"""Routes for invitations: admin management plus the public accept flow."""

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.application.errors import ApplicationError
from app.application.use_cases import invitations as invitations_uc
from app.domain.entities import Invitation, User
from app.infrastructure.database import get_db
from app.infrastructure.realtime import RealtimePublisher
from app.interfaces.api.dependencies import get_realtime_publisher, require_admin
from app.interfaces.api.routes_helpers import raise_http_error
from app.interfaces.api.schemas import (
    InvitationAccept,
    InvitationAccepted,
    InvitationCreate,
    InvitationCreated,
    InvitationList,
    InvitationPreviewRead,
    InvitationProjectRead,
    InvitationRead,
    InviterRead,
    MessageResponse,
    UserRead,
)

router = APIRouter(prefix="/invitations", tags=["invitations"])


def _to_read_model(invitation: Invitation) -> InvitationRead:
    return InvitationRead(
        id=invitation.id,
        email=invitation.email,
        name=invitation.name,
        role=invitation.role,
        project_ids=invitation.project_ids,
        expires_at=invitation.expires_at,
        created_at=invitation.created_at,
        invited_by=InviterRead(id=invitation.invited_by_id, name=invitation.invited_by_name),
        invite_link=invitations_uc.invite_link(invitation),
    )


@router.post("/", response_model=InvitationCreated, status_code=status.HTTP_201_CREATED)
def create_invitation(
    invitation_in: InvitationCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin),
):
    try:
        invitation = invitations_uc.create_invitation(
            db,
            current_user,
            email=invitation_in.email,
            name=invitation_in.name,
            role=invitation_in.role,
            project_ids=invitation_in.project_ids,
        )
    except ApplicationError as exc:
        raise_http_error(exc)
    read_model = _to_read_model(invitation)
    return InvitationCreated(invitation=read_model, invite_link=read_model.invite_link)


@router.get("/", response_model=InvitationList)
def list_invitations(
    db: Session = Depends(get_db),
    _: User = Depends(require_admin),
):
    pending = invitations_uc.list_pending_invitations(db)
    return InvitationList(invitations=[_to_read_model(invitation) for invitation in pending])


@router.delete("/{invitation_id}", response_model=MessageResponse)
def revoke_invitation(
    invitation_id: int,
    db: Session = Depends(get_db),
    _: User = Depends(require_admin),
):
    try:
        invitations_uc.revoke_invitation(db, invitation_id)
    except ApplicationError as exc:
        raise_http_error(exc)
    return MessageResponse(message="Invitation revoked")


@router.get("/validate/{token}", response_model=InvitationPreviewRead)
def validate_invitation(token: str, db: Session = Depends(get_db)):
    try:
        preview = invitations_uc.preview_invitation(db, token)
    except ApplicationError as exc:
        raise_http_error(exc)
    invitation = preview.invitation
    return InvitationPreviewRead(
        email=invitation.email,
        name=invitation.name,
        role=invitation.role,
        expires_at=invitation.expires_at,
        invited_by=InviterRead(name=invitation.invited_by_name),
        projects=[
            InvitationProjectRead(id=project.id, name=project.name)
            for project in preview.projects
        ],
    )


@router.post("/accept/{token}", response_model=InvitationAccepted)
def accept_invitation(
    token: str,
    accept_in: InvitationAccept,
    db: Session = Depends(get_db),
    publisher: RealtimePublisher = Depends(get_realtime_publisher),
):
    """Create the invitee's account; they sign in afterwards as usual."""

    try:
        user = invitations_uc.accept_invitation(
            db,
            token,
            password=accept_in.password,
            name=accept_in.name,
            publisher=publisher,
        )
    except ApplicationError as exc:
        raise_http_error(exc)
    return InvitationAccepted(
        message="Account created successfully", user=UserRead.model_validate(user)
    )
