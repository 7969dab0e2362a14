"""Create notifications and deliver them live or by e-mail."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from sqlalchemy.orm import Session

from app.application.errors import NotFoundError
from app.domain.entities import Notification, NotificationType
from app.infrastructure.email import send_notification_email
from app.infrastructure.realtime import RealtimePublisher, serialize_notification
from app.infrastructure.repositories import NotificationRepository, UserRepository
from app.utils import now_in_app_timezone

logger = logging.getLogger(__name__)


def notify(
    session: Session,
    *,
    recipient_id: int,
    type: NotificationType,
    title: str,
    message: str,
    resource_link: str | None = None,
    force_email: bool = False,
    publisher: RealtimePublisher | None = None,
) -> Notification:
    """Store a notification for ``recipient_id`` and deliver it.

    The notification is pushed to the recipient's live sockets. An e-mail copy
    is sent when ``force_email`` is set or the recipient is offline; e-mail
    failures leave ``email_sent`` false and are otherwise ignored.
    """

    recipient = UserRepository(session).get(recipient_id)
    if recipient is None:
        raise NotFoundError("Recipient not found")

    repository = NotificationRepository(session)
    notification = repository.create(
        Notification(
            id=None,
            recipient_id=recipient_id,
            type=NotificationType(type),
            title=title,
            message=message,
            resource_link=resource_link,
            created_at=now_in_app_timezone(),
        )
    )
    logger.info("Created notification %s for user %s", notification.id, recipient_id)

    online = False
    if publisher is not None:
        try:
            publisher.emit_to_user(
                recipient_id, "notification", serialize_notification(notification)
            )
            online = publisher.is_user_online(recipient_id)
        except Exception:
            logger.exception("Failed to push notification %s", notification.id)

    if force_email or not online:
        try:
            sent = send_notification_email(recipient.email, title, message, resource_link)
        except Exception:
            logger.exception("Failed to e-mail notification %s", notification.id)
            sent = False
        if sent:
            repository.mark_email_sent(notification.id)
            notification.email_sent = True
    return notification


def notify_many(
    session: Session,
    recipient_ids: Iterable[int],
    *,
    type: NotificationType,
    title: str,
    message: str,
    resource_link: str | None = None,
    publisher: RealtimePublisher | None = None,
) -> list[Notification]:
    """Notify each recipient independently; one failure does not stop the rest."""

    notifications: list[Notification] = []
    for recipient_id in dict.fromkeys(recipient_ids):
        try:
            notifications.append(
                notify(
                    session,
                    recipient_id=recipient_id,
                    type=type,
                    title=title,
                    message=message,
                    resource_link=resource_link,
                    publisher=publisher,
                )
            )
        except Exception:
            session.rollback()
            logger.exception("Failed to notify user %s", recipient_id)
    return notifications
