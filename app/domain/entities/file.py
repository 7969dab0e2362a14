"""Domain entities for files attached to cuts.

Only the metadata lives here; the bytes sit in external storage under ``path``.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class FileKind(str, Enum):
    """What a stored file is to its cut."""

    AUDIO = "audio"
    STEM = "stem"


def cut_storage_prefix(project_id: int, vibe_id: int, cut_id: int) -> str:
    """Directory holding every file of a cut; it changes when the cut moves."""

    return f"projects/{project_id}/vibes/{vibe_id}/cuts/{cut_id}/"


@dataclass
class ManagedFile:
    id: int | None
    cut_id: int
    kind: FileKind
    filename: str
    original_name: str
    path: str
    file_size: int
    mime_type: str
    name: str | None = None
    uploaded_by_id: int | None = None
    uploaded_by_name: str | None = None
    is_public: bool = False
    share_token: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @property
    def display_name(self) -> str:
        return self.name or self.original_name


__all__ = ["FileKind", "ManagedFile", "cut_storage_prefix"]
