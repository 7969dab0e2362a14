"""Recipient-scoped notification inbox operations."""

from __future__ import annotations

from dataclasses import dataclass

from sqlalchemy.orm import Session

from app.application.errors import NotFoundError, ValidationError
from app.domain.entities import Notification
from app.infrastructure.repositories import NotificationRepository


@dataclass
class NotificationPage:
    notifications: list[Notification]
    total: int
    unread_count: int


def list_notifications(
    session: Session,
    user_id: int,
    *,
    limit: int = 50,
    offset: int = 0,
    unread_only: bool = False,
) -> NotificationPage:
    if limit < 1:
        raise ValidationError("limit must be positive", field="limit")
    if offset < 0:
        raise ValidationError("offset cannot be negative", field="offset")

    repository = NotificationRepository(session)
    notifications = repository.list_for_user(
        user_id, limit=limit, offset=offset, unread_only=unread_only
    )
    return NotificationPage(
        notifications=list(notifications),
        total=repository.count_for_user(user_id, unread_only=unread_only),
        unread_count=repository.count_for_user(user_id, unread_only=True),
    )


def mark_notification_read(
    session: Session, user_id: int, notification_id: int
) -> Notification:
    """Mark a notification read; notifications of other users count as missing."""

    notification = NotificationRepository(session).mark_as_read(
        notification_id, recipient_id=user_id
    )
    if notification is None:
        raise NotFoundError("Notification not found")
    return notification


def mark_all_notifications_read(session: Session, user_id: int) -> int:
    return NotificationRepository(session).mark_all_as_read(user_id)


def delete_notification(session: Session, user_id: int, notification_id: int) -> None:
    if not NotificationRepository(session).delete(notification_id, recipient_id=user_id):
        raise NotFoundError("Notification not found")
