"""Realtime delivery helpers for the infrastructure layer."""

from .hub import RealtimeHub, project_room, user_room
from .publisher import RealtimePublisher, serialize_activity, serialize_notification

__all__ = [
    "RealtimeHub",
    "RealtimePublisher",
    "project_room",
    "serialize_activity",
    "serialize_notification",
    "user_room",
]
