"""Routes for file metadata on cuts and public share links."""

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from app.application.errors import ApplicationError
from app.application.use_cases import files as files_uc
from app.domain.entities import User
from app.infrastructure.database import get_db
from app.infrastructure.realtime import RealtimePublisher
from app.interfaces.api.dependencies import get_current_user, get_realtime_publisher
from app.interfaces.api.routes_helpers import raise_http_error
from app.interfaces.api.schemas import FileRead, FileRegister, FileUpdate, PublicFileRead

router = APIRouter(prefix="/files", tags=["files"])
public_router = APIRouter(prefix="/public", tags=["public"])


@router.get("/cut/{cut_id}", response_model=list[FileRead])
def list_files(
    cut_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    try:
        files = files_uc.list_files(db, current_user, cut_id)
    except ApplicationError as exc:
        raise_http_error(exc)
    return [FileRead.model_validate(managed_file) for managed_file in files]


@router.post("/cut/{cut_id}", response_model=FileRead, status_code=status.HTTP_201_CREATED)
def register_file(
    cut_id: int,
    file_in: FileRegister,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
    publisher: RealtimePublisher = Depends(get_realtime_publisher),
):
    """Record a take or stem that the storage service has already written."""

    try:
        managed_file = files_uc.register_file(
            db,
            current_user,
            cut_id,
            kind=file_in.kind,
            filename=file_in.filename,
            original_name=file_in.original_name or file_in.filename,
            file_size=file_in.file_size,
            mime_type=file_in.mime_type,
            name=file_in.name,
            publisher=publisher,
        )
    except ApplicationError as exc:
        raise_http_error(exc)
    return FileRead.model_validate(managed_file)


@router.get("/{file_id}", response_model=FileRead)
def read_file(
    file_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    try:
        managed_file = files_uc.get_file(db, current_user, file_id)
    except ApplicationError as exc:
        raise_http_error(exc)
    return FileRead.model_validate(managed_file)


@router.patch("/{file_id}", response_model=FileRead)
def rename_file(
    file_id: int,
    file_in: FileUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    try:
        managed_file = files_uc.rename_file(db, current_user, file_id, name=file_in.name)
    except ApplicationError as exc:
        raise_http_error(exc)
    return FileRead.model_validate(managed_file)


@router.delete("/{file_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_file(
    file_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    try:
        files_uc.delete_file(db, current_user, file_id)
    except ApplicationError as exc:
        raise_http_error(exc)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/{file_id}/share", response_model=FileRead)
def share_file(
    file_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
    publisher: RealtimePublisher = Depends(get_realtime_publisher),
):
    try:
        managed_file = files_uc.share_file(db, current_user, file_id, publisher=publisher)
    except ApplicationError as exc:
        raise_http_error(exc)
    return FileRead.model_validate(managed_file)


@router.delete("/{file_id}/share", response_model=FileRead)
def unshare_file(
    file_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    try:
        managed_file = files_uc.unshare_file(db, current_user, file_id)
    except ApplicationError as exc:
        raise_http_error(exc)
    return FileRead.model_validate(managed_file)


@public_router.get("/files/{share_token}", response_model=PublicFileRead)
def read_shared_file(share_token: str, db: Session = Depends(get_db)):
    """Describe a publicly shared file; no session required."""

    try:
        shared = files_uc.get_public_file(db, share_token)
    except ApplicationError as exc:
        raise_http_error(exc)
    managed_file = shared.file
    return PublicFileRead(
        id=managed_file.id,
        name=managed_file.name,
        original_name=managed_file.original_name,
        file_size=managed_file.file_size,
        mime_type=managed_file.mime_type,
        kind=managed_file.kind,
        created_at=managed_file.created_at,
        cut_name=shared.cut_name,
        vibe_name=shared.vibe_name,
        project_name=shared.project_name,
    )
