"""Use cases for cuts, their comments and lyrics."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

from sqlalchemy.orm import Session

from app.application.errors import NotFoundError, ValidationError
from app.application.use_cases.activities import record_activity_safely
from app.application.use_cases.vibes import get_vibe
from app.domain.entities import (
    ActivityType,
    Comment,
    CommentAddedMetadata,
    Cut,
    CutCreatedMetadata,
    CutMovedMetadata,
    LyricsUpdatedMetadata,
    Project,
    User,
    Vibe,
    cut_storage_prefix,
)
from app.infrastructure.realtime import RealtimePublisher
from app.infrastructure.repositories import CutRepository

logger = logging.getLogger(__name__)


@dataclass
class CutContext:
    """A cut together with the vibe and project it lives in."""

    cut: Cut
    vibe: Vibe
    project: Project

    @property
    def link(self) -> str:
        return cut_link(self.project.id, self.vibe.id, self.cut.id)


def cut_link(project_id: int, vibe_id: int, cut_id: int) -> str:
    return f"/projects/{project_id}/vibes/{vibe_id}/cuts/{cut_id}"


def _clean_name(name: str) -> str:
    name = (name or "").strip()
    if not name:
        raise ValidationError("Name is required", field="name")
    return name


def list_cuts(session: Session, user: User, vibe_id: int) -> Sequence[Cut]:
    get_vibe(session, user, vibe_id)
    return CutRepository(session).list_by_vibe(vibe_id)


def get_cut(session: Session, user: User, cut_id: int) -> CutContext:
    cut = CutRepository(session).get(cut_id)
    if cut is None:
        raise NotFoundError("Cut not found")
    vibe, project = get_vibe(session, user, cut.vibe_id)
    return CutContext(cut=cut, vibe=vibe, project=project)


def create_cut(
    session: Session,
    user: User,
    vibe_id: int,
    *,
    name: str,
    publisher: RealtimePublisher | None = None,
) -> Cut:
    vibe, project = get_vibe(session, user, vibe_id)
    repository = CutRepository(session)
    cut = repository.create(
        Cut(id=None, vibe_id=vibe_id, name=_clean_name(name), order=repository.next_order(vibe_id))
    )
    logger.info("User %s created cut %s in vibe %s", user.id, cut.id, vibe_id)

    record_activity_safely(
        session,
        activity_type=ActivityType.CUT_CREATED,
        actor_id=user.id,
        project_id=project.id,
        metadata=CutCreatedMetadata(
            cut_name=cut.name, vibe_name=vibe.name, project_name=project.name
        ),
        resource_link=cut_link(project.id, vibe.id, cut.id),
        publisher=publisher,
    )
    return cut


def move_cut(
    session: Session,
    user: User,
    cut_id: int,
    *,
    target_vibe_id: int | None,
    publisher: RealtimePublisher | None = None,
) -> CutContext:
    """Move a cut to the end of another vibe of the same project.

    Stored file paths follow the cut in the same transaction.
    """

    if target_vibe_id is None:
        raise ValidationError("Target vibe ID is required", field="targetVibeId")

    source = get_cut(session, user, cut_id)
    target_vibe, target_project = get_vibe(session, user, target_vibe_id)
    if target_project.id != source.project.id:
        raise ValidationError("Cannot move cuts between different projects", field="targetVibeId")
    if target_vibe.id == source.vibe.id:
        raise ValidationError("Cut is already in this vibe", field="targetVibeId")

    repository = CutRepository(session)
    moved = repository.move(
        cut_id,
        vibe_id=target_vibe.id,
        order=repository.next_order(target_vibe.id),
        path_prefixes=(
            cut_storage_prefix(source.project.id, source.vibe.id, cut_id),
            cut_storage_prefix(target_project.id, target_vibe.id, cut_id),
        ),
    )
    if moved is None:
        raise NotFoundError("Cut not found")
    logger.info("User %s moved cut %s to vibe %s", user.id, cut_id, target_vibe.id)

    record_activity_safely(
        session,
        activity_type=ActivityType.CUT_MOVED,
        actor_id=user.id,
        project_id=target_project.id,
        metadata=CutMovedMetadata(
            cut_name=moved.name,
            from_vibe_name=source.vibe.name,
            to_vibe_name=target_vibe.name,
            project_name=target_project.name,
        ),
        resource_link=cut_link(target_project.id, target_vibe.id, moved.id),
        publisher=publisher,
    )
    return CutContext(cut=moved, vibe=target_vibe, project=target_project)


def list_comments(session: Session, user: User, cut_id: int) -> Sequence[Comment]:
    get_cut(session, user, cut_id)
    return CutRepository(session).list_comments(cut_id)


def add_comment(
    session: Session,
    user: User,
    cut_id: int,
    *,
    content: str,
    timestamp: float | None = None,
    audio_file_id: str | None = None,
    parent_id: int | None = None,
    publisher: RealtimePublisher | None = None,
) -> Comment:
    """Add a top-level comment or a reply; replies inherit the parent's audio file."""

    context = get_cut(session, user, cut_id)
    content = (content or "").strip()
    if not content:
        raise ValidationError("Content is required", field="content")

    repository = CutRepository(session)
    if parent_id is not None:
        parent = repository.get_comment(cut_id, parent_id)
        if parent is None:
            raise NotFoundError("Parent comment not found")
        audio_file_id = parent.audio_file_id
        timestamp = None
    elif timestamp is not None and timestamp < 0:
        raise ValidationError("Timestamp cannot be negative", field="timestamp")

    comment = repository.add_comment(
        Comment(
            id=None,
            cut_id=cut_id,
            user_id=user.id,
            content=content,
            timestamp=timestamp,
            audio_file_id=audio_file_id,
            parent_id=parent_id,
        )
    )

    record_activity_safely(
        session,
        activity_type=ActivityType.COMMENT_ADDED,
        actor_id=user.id,
        project_id=context.project.id,
        metadata=CommentAddedMetadata(
            cut_name=context.cut.name,
            vibe_name=context.vibe.name,
            project_name=context.project.name,
            is_reply=comment.is_reply,
            comment_id=comment.id,
        ),
        resource_link=context.link,
        publisher=publisher,
    )
    return comment


def get_lyrics(session: Session, user: User, cut_id: int) -> list[dict[str, Any]]:
    return get_cut(session, user, cut_id).cut.lyrics


def update_lyrics(
    session: Session,
    user: User,
    cut_id: int,
    *,
    lyrics: list[dict[str, Any]],
    publisher: RealtimePublisher | None = None,
) -> list[dict[str, Any]]:
    """Replace the cut's lyrics with ``lyrics`` (already shape-validated)."""

    context = get_cut(session, user, cut_id)
    updated = CutRepository(session).update_lyrics(cut_id, lyrics)
    if updated is None:
        raise NotFoundError("Cut not found")

    record_activity_safely(
        session,
        activity_type=ActivityType.LYRICS_UPDATED,
        actor_id=user.id,
        project_id=context.project.id,
        metadata=LyricsUpdatedMetadata(
            cut_name=context.cut.name,
            vibe_name=context.vibe.name,
            project_name=context.project.name,
        ),
        resource_link=context.link,
        publisher=publisher,
    )
    return updated.lyrics
