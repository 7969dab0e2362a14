"""File metadata and sharing schemas."""

from datetime import datetime

from pydantic import Field

from app.domain.entities import FileKind

from .base import CamelModel


class FileRegister(CamelModel):
    """Describes a file already written to storage."""

    kind: FileKind = FileKind.AUDIO
    filename: str = Field(..., min_length=1, max_length=255)
    original_name: str | None = Field(default=None, max_length=255)
    file_size: int = Field(..., ge=0)
    mime_type: str = Field(..., min_length=1, max_length=100)
    name: str | None = Field(default=None, max_length=200)


class FileUpdate(CamelModel):
    name: str | None = Field(default=None, max_length=200)


class FileRead(CamelModel):
    id: int
    cut_id: int
    kind: FileKind
    name: str | None = None
    filename: str
    original_name: str
    path: str
    file_size: int
    mime_type: str
    uploaded_by_id: int | None = None
    uploaded_by_name: str | None = None
    is_public: bool
    share_token: str | None = None
    created_at: datetime | None = None


class PublicFileRead(CamelModel):
    id: int
    name: str | None = None
    original_name: str
    file_size: int
    mime_type: str
    kind: FileKind
    created_at: datetime | None = None
    cut_name: str | None = None
    vibe_name: str | None = None
    project_name: str | None = None
