"""Pydantic models describing notification payloads."""

from __future__ import annotations

from datetime import datetime

from app.domain.entities import NotificationType

from .base import CamelModel


class NotificationRead(CamelModel):
    """Representation of a notification delivered to the client."""

    id: int
    type: NotificationType
    title: str
    message: str
    resource_link: str | None = None
    is_read: bool
    email_sent: bool
    created_at: datetime


class NotificationListResponse(CamelModel):
    notifications: list[NotificationRead]
    unread_count: int
    total: int


__all__ = ["NotificationListResponse", "NotificationRead"]
