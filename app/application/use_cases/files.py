"""Use cases for audio takes and stems attached to cuts.

The binaries live in external storage; these flows keep the metadata, the
storage path and the public share state.
"""

from __future__ import annotations

import logging
import secrets
from collections.abc import Sequence
from dataclasses import dataclass

from sqlalchemy.orm import Session

from app.application.errors import ForbiddenError, NotFoundError, ValidationError
from app.application.use_cases.activities import record_activity_safely
from app.application.use_cases.cuts import CutContext, get_cut
from app.application.use_cases.notifications import notify_many
from app.domain.entities import (
    ActivityType,
    FileKind,
    FileSharedMetadata,
    FileUploadedMetadata,
    ManagedFile,
    NotificationType,
    User,
    cut_storage_prefix,
)
from app.infrastructure.realtime import RealtimePublisher
from app.infrastructure.repositories import (
    CutRepository,
    FileRepository,
    ProjectRepository,
    VibeRepository,
)

logger = logging.getLogger(__name__)

STEM_MIME_TYPES = frozenset(
    {"application/zip", "application/x-zip-compressed", "application/octet-stream"}
)


@dataclass
class PublicFile:
    """A shared file as seen by someone holding its share link."""

    file: ManagedFile
    cut_name: str | None
    vibe_name: str | None
    project_name: str | None


def audio_tab_link(context: CutContext) -> str:
    return f"{context.link}?tab=audio"


def _check_upload(kind: FileKind, filename: str, mime_type: str, file_size: int) -> None:
    if not filename or "/" in filename or "\\" in filename or filename in {".", ".."}:
        raise ValidationError("Invalid file name", field="filename")
    if file_size < 0:
        raise ValidationError("File size cannot be negative", field="fileSize")
    mime_type = mime_type.lower()
    if kind is FileKind.AUDIO and not mime_type.startswith("audio/"):
        raise ValidationError("Only audio files can be uploaded as a cut", field="mimeType")
    if kind is FileKind.STEM and mime_type not in STEM_MIME_TYPES:
        raise ValidationError("Stems must be uploaded as a zip archive", field="mimeType")


def _load(session: Session, user: User, file_id: int) -> tuple[ManagedFile, CutContext]:
    managed_file = FileRepository(session).get(file_id)
    if managed_file is None:
        raise NotFoundError("File not found")
    return managed_file, get_cut(session, user, managed_file.cut_id)


def _ensure_owner_or_admin(user: User, managed_file: ManagedFile) -> None:
    if not user.is_admin() and managed_file.uploaded_by_id != user.id:
        raise ForbiddenError("Only the file owner or an admin can modify this file")


def list_files(session: Session, user: User, cut_id: int) -> Sequence[ManagedFile]:
    get_cut(session, user, cut_id)
    return FileRepository(session).list_by_cut(cut_id)


def get_file(session: Session, user: User, file_id: int) -> ManagedFile:
    return _load(session, user, file_id)[0]


def register_file(
    session: Session,
    user: User,
    cut_id: int,
    *,
    kind: FileKind,
    filename: str,
    original_name: str,
    file_size: int,
    mime_type: str,
    name: str | None = None,
    publisher: RealtimePublisher | None = None,
) -> ManagedFile:
    """Record a file already written to storage for ``cut_id``.

    Audio takes are announced in the feed and to the other project members;
    stems are stored silently.
    """

    context = get_cut(session, user, cut_id)
    filename = (filename or "").strip()
    _check_upload(kind, filename, mime_type or "", file_size)
    original_name = (original_name or "").strip() or filename

    prefix = cut_storage_prefix(context.project.id, context.vibe.id, cut_id)
    managed_file = FileRepository(session).create(
        ManagedFile(
            id=None,
            cut_id=cut_id,
            kind=kind,
            filename=filename,
            original_name=original_name,
            path=f"{prefix}{kind.value}/{filename}",
            file_size=file_size,
            mime_type=mime_type,
            name=(name or "").strip() or None,
            uploaded_by_id=user.id,
        )
    )
    logger.info(
        "User %s registered %s file %s on cut %s", user.id, kind.value, managed_file.id, cut_id
    )

    if kind is not FileKind.AUDIO:
        return managed_file

    record_activity_safely(
        session,
        activity_type=ActivityType.FILE_UPLOADED,
        actor_id=user.id,
        project_id=context.project.id,
        metadata=FileUploadedMetadata(
            file_name=original_name,
            cut_name=context.cut.name,
            vibe_name=context.vibe.name,
            project_name=context.project.name,
        ),
        resource_link=audio_tab_link(context),
        publisher=publisher,
    )
    notify_many(
        session,
        context.project.member_ids() - {user.id},
        type=NotificationType.INFO,
        title="New Audio Uploaded",
        message=f'{user.name} uploaded a new audio file "{original_name}" to {context.cut.name}.',
        resource_link=audio_tab_link(context),
        publisher=publisher,
    )
    return managed_file


def rename_file(session: Session, user: User, file_id: int, *, name: str | None) -> ManagedFile:
    managed_file, _ = _load(session, user, file_id)
    _ensure_owner_or_admin(user, managed_file)
    renamed = FileRepository(session).rename(file_id, (name or "").strip() or None)
    if renamed is None:
        raise NotFoundError("File not found")
    return renamed


def delete_file(session: Session, user: User, file_id: int) -> ManagedFile:
    """Drop the metadata row and return it so the caller can purge storage."""

    managed_file, _ = _load(session, user, file_id)
    _ensure_owner_or_admin(user, managed_file)
    if not FileRepository(session).delete(file_id):
        raise NotFoundError("File not found")
    logger.info("User %s deleted file %s (%s)", user.id, file_id, managed_file.path)
    return managed_file


def share_file(
    session: Session,
    user: User,
    file_id: int,
    *,
    publisher: RealtimePublisher | None = None,
) -> ManagedFile:
    """Publish the file under a share token; sharing again keeps the token."""

    managed_file, context = _load(session, user, file_id)
    _ensure_owner_or_admin(user, managed_file)
    if managed_file.is_public and managed_file.share_token:
        return managed_file

    shared = FileRepository(session).set_sharing(
        file_id, managed_file.share_token or secrets.token_urlsafe(24)
    )
    if shared is None:
        raise NotFoundError("File not found")

    record_activity_safely(
        session,
        activity_type=ActivityType.FILE_SHARED,
        actor_id=user.id,
        project_id=context.project.id,
        metadata=FileSharedMetadata(
            file_name=shared.display_name,
            cut_name=context.cut.name,
            project_name=context.project.name,
        ),
        resource_link=audio_tab_link(context),
        publisher=publisher,
    )
    return shared


def unshare_file(session: Session, user: User, file_id: int) -> ManagedFile:
    managed_file, _ = _load(session, user, file_id)
    _ensure_owner_or_admin(user, managed_file)
    private = FileRepository(session).set_sharing(file_id, None)
    if private is None:
        raise NotFoundError("File not found")
    return private


def get_public_file(session: Session, share_token: str) -> PublicFile:
    managed_file = FileRepository(session).get_by_share_token(share_token)
    if managed_file is None or not managed_file.is_public:
        raise NotFoundError("File not found or not shared")

    cut = CutRepository(session).get(managed_file.cut_id)
    vibe = VibeRepository(session).get(cut.vibe_id) if cut else None
    project = ProjectRepository(session).get(vibe.project_id) if vibe else None
    return PublicFile(
        file=managed_file,
        cut_name=cut.name if cut else None,
        vibe_name=vibe.name if vibe else None,
        project_name=project.name if project else None,
    )


__all__ = [
    "PublicFile",
    "delete_file",
    "get_file",
    "get_public_file",
    "list_files",
    "register_file",
    "rename_file",
    "share_file",
    "unshare_file",
]
