"""Routes for cuts, their comments and lyrics."""

from typing import Any

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.application.errors import ApplicationError
from app.application.use_cases import cuts as cuts_uc
from app.application.use_cases.cuts import CutContext
from app.domain.entities import User
from app.infrastructure.database import get_db
from app.infrastructure.realtime import RealtimePublisher
from app.interfaces.api.dependencies import get_current_user, get_realtime_publisher
from app.interfaces.api.routes_helpers import raise_http_error
from app.interfaces.api.schemas import (
    CommentCreate,
    CommentRead,
    CutCreate,
    CutDetailRead,
    CutMoveRequest,
    CutRead,
    LyricsUpdate,
    VibeSummary,
)

router = APIRouter(prefix="/cuts", tags=["cuts"])


def _to_detail(context: CutContext) -> CutDetailRead:
    return CutDetailRead(
        **CutRead.model_validate(context.cut).model_dump(),
        vibe=VibeSummary(id=context.vibe.id, name=context.vibe.name),
        project_id=context.project.id,
    )


@router.get("/vibe/{vibe_id}", response_model=list[CutRead])
def list_cuts(
    vibe_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    try:
        cuts = cuts_uc.list_cuts(db, current_user, vibe_id)
    except ApplicationError as exc:
        raise_http_error(exc)
    return [CutRead.model_validate(cut) for cut in cuts]


@router.post("/vibe/{vibe_id}", response_model=CutRead, status_code=status.HTTP_201_CREATED)
def create_cut(
    vibe_id: int,
    cut_in: CutCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
    publisher: RealtimePublisher = Depends(get_realtime_publisher),
):
    try:
        cut = cuts_uc.create_cut(
            db, current_user, vibe_id, name=cut_in.name, publisher=publisher
        )
    except ApplicationError as exc:
        raise_http_error(exc)
    return CutRead.model_validate(cut)


@router.get("/{cut_id}", response_model=CutDetailRead)
def read_cut(
    cut_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    try:
        context = cuts_uc.get_cut(db, current_user, cut_id)
    except ApplicationError as exc:
        raise_http_error(exc)
    return _to_detail(context)


@router.patch("/{cut_id}/move", response_model=CutDetailRead)
def move_cut(
    cut_id: int,
    move_in: CutMoveRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
    publisher: RealtimePublisher = Depends(get_realtime_publisher),
):
    """Move the cut to the end of another vibe within the same project."""

    try:
        context = cuts_uc.move_cut(
            db,
            current_user,
            cut_id,
            target_vibe_id=move_in.target_vibe_id,
            publisher=publisher,
        )
    except ApplicationError as exc:
        raise_http_error(exc)
    return _to_detail(context)


@router.get("/{cut_id}/comments", response_model=list[CommentRead])
def list_comments(
    cut_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    try:
        comments = cuts_uc.list_comments(db, current_user, cut_id)
    except ApplicationError as exc:
        raise_http_error(exc)
    return [CommentRead.model_validate(comment) for comment in comments]


@router.post(
    "/{cut_id}/comments",
    response_model=CommentRead,
    status_code=status.HTTP_201_CREATED,
)
def add_comment(
    cut_id: int,
    comment_in: CommentCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
    publisher: RealtimePublisher = Depends(get_realtime_publisher),
):
    try:
        comment = cuts_uc.add_comment(
            db,
            current_user,
            cut_id,
            content=comment_in.content,
            timestamp=comment_in.timestamp,
            audio_file_id=comment_in.audio_file_id,
            parent_id=comment_in.parent_id,
            publisher=publisher,
        )
    except ApplicationError as exc:
        raise_http_error(exc)
    return CommentRead.model_validate(comment)


@router.get("/{cut_id}/lyrics", response_model=list[dict[str, Any]])
def read_lyrics(
    cut_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    try:
        return cuts_uc.get_lyrics(db, current_user, cut_id)
    except ApplicationError as exc:
        raise_http_error(exc)


@router.put("/{cut_id}/lyrics", response_model=list[dict[str, Any]])
def update_lyrics(
    cut_id: int,
    lyrics_in: LyricsUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
    publisher: RealtimePublisher = Depends(get_realtime_publisher),
):
    """Replace the cut's lyrics, one entry per audio file."""

    lyrics = [entry.model_dump(by_alias=True) for entry in lyrics_in.lyrics]
    try:
        return cuts_uc.update_lyrics(
            db, current_user, cut_id, lyrics=lyrics, publisher=publisher
        )
    except ApplicationError as exc:
        raise_http_error(exc)
