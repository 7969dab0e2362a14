"""Per-user read and dismiss marks on activities."""

from __future__ import annotations

import logging

from sqlalchemy.orm import Session

from app.application.errors import NotFoundError
from app.application.use_cases.access import can_access_project, visible_project_ids
from app.domain.entities import Activity, User
from app.infrastructure.repositories import ActivityRepository

logger = logging.getLogger(__name__)


def _get_visible_activity(session: Session, user: User, activity_id: int) -> Activity:
    activity = ActivityRepository(session).get(activity_id)
    # Activities of foreign projects are reported as missing.
    if activity is None or not can_access_project(session, user, activity.project_id):
        raise NotFoundError("Activity not found")
    return activity


def mark_activity_read(session: Session, user: User, activity_id: int) -> None:
    """Mark one activity read; repeating the call changes nothing."""

    _get_visible_activity(session, user, activity_id)
    ActivityRepository(session).mark_read_many([activity_id], user.id)


def mark_all_activities_read(session: Session, user: User) -> int:
    """Mark every visible unread activity read and return how many were marked."""

    project_ids = visible_project_ids(session, user)
    if project_ids is not None and not project_ids:
        return 0

    repository = ActivityRepository(session)
    marked = repository.mark_read_many(
        repository.list_unread_ids(user.id, project_ids), user.id
    )
    logger.info("User %s marked %s activities as read", user.id, marked)
    return marked


def dismiss_activity(session: Session, user: User, activity_id: int) -> None:
    """Hide an activity from ``user``'s feed, leaving its read state alone."""

    _get_visible_activity(session, user, activity_id)
    ActivityRepository(session).dismiss_many([activity_id], user.id)


def undismiss_activity(session: Session, user: User, activity_id: int) -> None:
    _get_visible_activity(session, user, activity_id)
    ActivityRepository(session).undismiss(activity_id, user.id)


def dismiss_all_activities(session: Session, user: User) -> int:
    """Dismiss every activity currently in ``user``'s feed."""

    project_ids = visible_project_ids(session, user)
    if project_ids is not None and not project_ids:
        return 0

    repository = ActivityRepository(session)
    dismissed = repository.dismiss_many(
        repository.list_visible_ids(user.id, project_ids), user.id
    )
    logger.info("User %s dismissed %s activities", user.id, dismissed)
    return dismissed
