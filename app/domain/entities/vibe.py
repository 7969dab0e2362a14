"""Domain entity representing a song concept."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass
class Vibe:
    """A song concept that groups one or more cuts."""

    id: int | None
    project_id: int
    name: str
    theme: str | None = None
    notes: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


__all__ = ["Vibe"]
