"""Cut, comment and lyrics schemas."""

from datetime import datetime

from pydantic import Field

from .base import CamelModel


class CutCreate(CamelModel):
    name: str = Field(..., min_length=1, max_length=200)


class CutRead(CamelModel):
    id: int
    vibe_id: int
    name: str
    order: int
    created_at: datetime | None = None
    updated_at: datetime | None = None


class VibeSummary(CamelModel):
    id: int
    name: str


class CutDetailRead(CutRead):
    vibe: VibeSummary
    project_id: int


class CutMoveRequest(CamelModel):
    target_vibe_id: int | None = None


class CommentCreate(CamelModel):
    content: str = Field(..., max_length=5000)
    timestamp: float | None = None
    audio_file_id: str | None = Field(default=None, max_length=100)
    parent_id: int | None = None


class CommentRead(CamelModel):
    id: int
    cut_id: int
    user_id: int
    user_name: str | None = None
    content: str
    timestamp: float | None = None
    audio_file_id: str | None = None
    parent_id: int | None = None
    is_reply: bool
    created_at: datetime | None = None


class LyricsLine(CamelModel):
    timestamp: float = Field(..., strict=True, ge=0)
    text: str = Field(..., strict=True)


class LyricsEntry(CamelModel):
    audio_file_id: str = Field(..., min_length=1)
    lines: list[LyricsLine]


class LyricsUpdate(CamelModel):
    lyrics: list[LyricsEntry]
