"""Pydantic schemas for activity feed endpoints."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import Field

from app.domain.entities import ActivityType

from .base import CamelModel


class ActivityUserRead(CamelModel):
    id: int
    name: str
    avatar_url: str | None = None


class ActivityProjectRead(CamelModel):
    id: int
    name: str | None = None


class ActivityRead(CamelModel):
    id: int
    type: ActivityType
    user_id: int | None = None
    project_id: int
    metadata: dict[str, Any] = Field(
        default_factory=dict, description="Per-type fields, keyed in camelCase"
    )
    resource_link: str | None = None
    created_at: datetime
    is_read: bool = False
    user: ActivityUserRead | None = None
    project: ActivityProjectRead


class ActivityListResponse(CamelModel):
    activities: list[ActivityRead]
    total: int
    unread_count: int


__all__ = [
    "ActivityListResponse",
    "ActivityProjectRead",
    "ActivityRead",
    "ActivityUserRead",
]
