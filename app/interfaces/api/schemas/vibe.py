"""Vibe schemas."""

from datetime import datetime

from pydantic import Field

from .base import CamelModel
from .cut import CutRead


class VibeCreate(CamelModel):
    name: str = Field(..., min_length=1, max_length=200)
    theme: str | None = Field(default=None, max_length=200)
    notes: str | None = None


class VibeRead(CamelModel):
    id: int
    project_id: int
    name: str
    theme: str | None = None
    notes: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class VibeDetailRead(VibeRead):
    project_name: str
    cuts: list[CutRead] = Field(default_factory=list)
