"""Retention cleanup for read notifications."""

from __future__ import annotations

import logging
from sqlalchemy.orm import Session

from app.application.errors import ValidationError
from app.config import get_settings
from app.infrastructure.repositories import NotificationRepository
from app.utils import retention_cutoff

logger = logging.getLogger(__name__)


def cleanup_old_notifications(session: Session, days: int | None = None) -> int:
    """Delete read notifications older than ``days``; unread ones are kept."""

    if days is None:
        days = get_settings().notification_retention_days
    if days < 1:
        raise ValidationError("days must be positive", field="days")

    deleted = NotificationRepository(session).delete_read_older_than(retention_cutoff(days))
    logger.info("Deleted %s read notifications older than %s days", deleted, days)
    return deleted
