"""Per-user activity feed queries."""

from __future__ import annotations

from sqlalchemy.orm import Session

from app.application.errors import ValidationError
from app.application.use_cases.access import visible_project_ids
from app.domain.entities import ActivityFeed, ActivityType, User
from app.infrastructure.repositories import ActivityRepository

DEFAULT_PAGE_SIZE = 20


def _scoped_project_ids(
    session: Session, user: User, project_id: int | None
) -> list[int] | None | bool:
    """Return the project scope for ``user`` or ``False`` when nothing is visible."""

    visible = visible_project_ids(session, user)
    if project_id is not None:
        if visible is not None and project_id not in visible:
            return False
        return [project_id]
    if visible is not None and not visible:
        return False
    return visible


def list_activities(
    session: Session,
    user: User,
    *,
    limit: int = DEFAULT_PAGE_SIZE,
    offset: int = 0,
    activity_type: ActivityType | None = None,
    project_id: int | None = None,
    unread_only: bool = False,
) -> ActivityFeed:
    """Return a page of the activities ``user`` may currently see, newest first.

    A project the user cannot see, or a user without memberships, yields an
    empty feed rather than an error.
    """

    if limit < 1:
        raise ValidationError("limit must be positive", field="limit")
    if offset < 0:
        raise ValidationError("offset cannot be negative", field="offset")

    project_ids = _scoped_project_ids(session, user, project_id)
    if project_ids is False:
        return ActivityFeed.empty()

    repository = ActivityRepository(session)
    activities, total = repository.list_feed(
        user.id,
        project_ids,
        limit=limit,
        offset=offset,
        activity_type=activity_type,
        unread_only=unread_only,
    )
    unread_count = repository.count_unread(user.id, project_ids)
    return ActivityFeed(activities=activities, total=total, unread_count=unread_count)


def get_unread_activity_count(session: Session, user: User) -> int:
    project_ids = _scoped_project_ids(session, user, None)
    if project_ids is False:
        return 0
    return ActivityRepository(session).count_unread(user.id, project_ids)
