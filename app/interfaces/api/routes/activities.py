"""Endpoints for the project activity feed and per-user read state."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.orm import Session

from app.application.errors import ApplicationError
from app.application.use_cases.activities import (
    dismiss_activity,
    dismiss_all_activities,
    get_unread_activity_count,
    list_activities as list_activities_uc,
    mark_activity_read,
    mark_all_activities_read,
    undismiss_activity,
)
from app.domain.entities import Activity, ActivityType, User
from app.infrastructure.database import get_db
from app.interfaces.api.dependencies import get_current_user
from app.interfaces.api.routes_helpers import raise_http_error
from app.interfaces.api.schemas import (
    ActivityListResponse,
    ActivityProjectRead,
    ActivityRead,
    ActivityUserRead,
    CountResponse,
)

router = APIRouter(prefix="/activities", tags=["activities"])


def _to_read_model(activity: Activity) -> ActivityRead:
    actor = activity.actor
    return ActivityRead(
        id=activity.id,
        type=activity.type,
        user_id=activity.actor_id,
        project_id=activity.project_id,
        metadata=activity.metadata,
        resource_link=activity.resource_link,
        created_at=activity.created_at,
        is_read=activity.is_read,
        user=ActivityUserRead(id=actor.id, name=actor.name, avatar_url=actor.avatar_url)
        if actor
        else None,
        project=ActivityProjectRead(id=activity.project_id, name=activity.project_name),
    )


@router.get("/", response_model=ActivityListResponse)
def list_activities(
    limit: int = Query(20, ge=1, le=100),
    offset: int = Query(0, ge=0),
    activity_type: ActivityType | None = Query(None, alias="type"),
    project_id: int | None = Query(None, alias="projectId"),
    unread_only: bool = Query(False, alias="unreadOnly"),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Return the caller's feed, newest first, with total and unread counters."""

    try:
        feed = list_activities_uc(
            db,
            current_user,
            limit=limit,
            offset=offset,
            activity_type=activity_type,
            project_id=project_id,
            unread_only=unread_only,
        )
    except ApplicationError as exc:
        raise_http_error(exc)
    return ActivityListResponse(
        activities=[_to_read_model(activity) for activity in feed.activities],
        total=feed.total,
        unread_count=feed.unread_count,
    )


@router.get("/unread-count", response_model=CountResponse)
def unread_count(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return CountResponse(count=get_unread_activity_count(db, current_user))


@router.patch("/read-all", response_model=CountResponse)
def read_all(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return CountResponse(count=mark_all_activities_read(db, current_user))


@router.patch("/{activity_id}/read", status_code=status.HTTP_204_NO_CONTENT)
def read_activity(
    activity_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    try:
        mark_activity_read(db, current_user, activity_id)
    except ApplicationError as exc:
        raise_http_error(exc)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.patch("/{activity_id}/undismiss", status_code=status.HTTP_204_NO_CONTENT)
def undismiss(
    activity_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    try:
        undismiss_activity(db, current_user, activity_id)
    except ApplicationError as exc:
        raise_http_error(exc)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete("/{activity_id}", status_code=status.HTTP_204_NO_CONTENT)
def dismiss(
    activity_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Hide the activity from the caller's feed; nobody else is affected."""

    try:
        dismiss_activity(db, current_user, activity_id)
    except ApplicationError as exc:
        raise_http_error(exc)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete("/", response_model=CountResponse)
def dismiss_all(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return CountResponse(count=dismiss_all_activities(db, current_user))
