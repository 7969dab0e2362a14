"""Domain entity representing a user notification."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class NotificationType(str, Enum):
    """Severity of a notification."""

    INFO = "INFO"
    SUCCESS = "SUCCESS"
    WARNING = "WARNING"
    ERROR = "ERROR"


@dataclass
class Notification:
    """Personal alert delivered to exactly one recipient."""

    id: int | None
    recipient_id: int
    type: NotificationType
    title: str
    message: str
    resource_link: str | None = None
    is_read: bool = False
    email_sent: bool = False
    created_at: datetime | None = None


__all__ = ["Notification", "NotificationType"]
