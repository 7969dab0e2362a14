"""Record project activities and broadcast them to the project room."""

from __future__ import annotations

import logging

from sqlalchemy.orm import Session

from app.application.errors import ValidationError
from app.domain.entities import METADATA_BY_TYPE, Activity, ActivityMetadata, ActivityType
from app.infrastructure.realtime import RealtimePublisher, serialize_activity
from app.infrastructure.repositories import ActivityRepository

logger = logging.getLogger(__name__)


def record_activity(
    session: Session,
    *,
    activity_type: ActivityType,
    actor_id: int,
    project_id: int,
    metadata: ActivityMetadata | None = None,
    resource_link: str | None = None,
    publisher: RealtimePublisher | None = None,
) -> Activity:
    """Persist an activity, then push it to the live members of its project.

    The row is committed before the broadcast so listeners never receive an
    activity that cannot be queried yet. Broadcast problems are logged only.
    """

    activity_type = ActivityType(activity_type)
    if metadata is not None and not isinstance(metadata, METADATA_BY_TYPE[activity_type]):
        raise ValidationError(
            f"{type(metadata).__name__} does not describe a {activity_type.value} activity",
            field="metadata",
        )

    activity = ActivityRepository(session).create(
        activity_type=activity_type,
        actor_id=actor_id,
        project_id=project_id,
        metadata=metadata.to_payload() if metadata is not None else {},
        resource_link=resource_link,
    )
    logger.info(
        "Recorded %s activity %s in project %s", activity_type.value, activity.id, project_id
    )

    if publisher is not None:
        try:
            publisher.emit_to_project(project_id, "activity", serialize_activity(activity))
        except Exception:
            logger.exception("Failed to broadcast activity %s", activity.id)
    return activity


def record_activity_safely(session: Session, **kwargs) -> Activity | None:
    """Call :func:`record_activity`, logging failures instead of raising.

    Used after a primary mutation has committed, which must stand regardless.
    """

    try:
        return record_activity(session, **kwargs)
    except Exception:
        session.rollback()
        logger.exception(
            "Failed to record %s activity", kwargs.get("activity_type", "unknown")
        )
        return None
