"""Use cases for personal notifications."""

from .cleanup import cleanup_old_notifications
from .dispatch import notify, notify_many
from .inbox import (
    NotificationPage,
    delete_notification,
    list_notifications,
    mark_all_notifications_read,
    mark_notification_read,
)

__all__ = [
    "NotificationPage",
    "cleanup_old_notifications",
    "delete_notification",
    "list_notifications",
    "mark_all_notifications_read",
    "mark_notification_read",
    "notify",
    "notify_many",
]
