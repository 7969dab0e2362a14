"""Retention cleanup for the activity log."""

from __future__ import annotations

import logging
from sqlalchemy.orm import Session

from app.application.errors import ValidationError
from app.config import get_settings
from app.infrastructure.repositories import ActivityRepository
from app.utils import retention_cutoff

logger = logging.getLogger(__name__)


def cleanup_old_activities(session: Session, days: int | None = None) -> int:
    """Delete activities older than ``days`` (``ACTIVITY_RETENTION_DAYS`` by default).

    Read and dismiss marks go with them through the foreign key cascade.
    """

    if days is None:
        days = get_settings().activity_retention_days
    if days < 1:
        raise ValidationError("days must be positive", field="days")

    deleted = ActivityRepository(session).delete_older_than(retention_cutoff(days))
    logger.info("Deleted %s activities older than %s days", deleted, days)
    return deleted
