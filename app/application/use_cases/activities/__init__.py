"""Use cases for the project activity feed."""

from .cleanup import cleanup_old_activities
from .feed import get_unread_activity_count, list_activities
from .read_state import (
    dismiss_activity,
    dismiss_all_activities,
    mark_activity_read,
    mark_all_activities_read,
    undismiss_activity,
)
from .record_activity import record_activity, record_activity_safely

__all__ = [
    "cleanup_old_activities",
    "dismiss_activity",
    "dismiss_all_activities",
    "get_unread_activity_count",
    "list_activities",
    "mark_activity_read",
    "mark_all_activities_read",
    "record_activity",
    "record_activity_safely",
    "undismiss_activity",
]
