"""Domain entities representing track versions and their comments."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any


@dataclass
class Cut:
    """A specific version of a track inside a vibe."""

    id: int | None
    vibe_id: int
    name: str
    order: int = 0
    lyrics: list[dict[str, Any]] = field(default_factory=list)
    created_at: datetime | None = None
    updated_at: datetime | None = None


@dataclass
class Comment:
    """Feedback left on a cut, optionally anchored to a timestamp."""

    id: int | None
    cut_id: int
    user_id: int
    content: str
    timestamp: float | None = None
    audio_file_id: str | None = None
    parent_id: int | None = None
    user_name: str | None = None
    created_at: datetime | None = None

    @property
    def is_reply(self) -> bool:
        return self.parent_id is not None


__all__ = ["Comment", "Cut"]
