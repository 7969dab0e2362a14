"""Utility helpers to push events to websocket subscribers."""

from __future__ import annotations

import asyncio
import copy
import logging
from typing import Any, Awaitable, Callable

from anyio import from_thread

from app.domain.entities import Activity, Notification

from .hub import RealtimeHub, project_room, user_room

logger = logging.getLogger(__name__)


class RealtimePublisher:
    """Serialize events and schedule their delivery through a :class:`RealtimeHub`.

    Delivery is best effort: a failure is logged and never reaches the caller.
    """

    def __init__(self, hub: RealtimeHub) -> None:
        self._hub = hub
        # Strong references keep pending deliveries alive until they finish.
        self._pending: set[asyncio.Task] = set()

    @property
    def hub(self) -> RealtimeHub:
        return self._hub

    def is_user_online(self, user_id: int) -> bool:
        return self._hub.is_user_online(user_id)

    def join_project_room(self, user_id: int, project_id: int) -> None:
        self._hub.join_project_room(user_id, project_id)

    def leave_project_room(self, user_id: int, project_id: int) -> None:
        self._hub.leave_project_room(user_id, project_id)

    def emit_to_user(self, user_id: int, event: str, payload: Any) -> None:
        room = user_room(user_id)
        if not self._hub.has_listeners(room):
            return
        self._schedule(self._hub.send_to_room, room, _message(event, payload))

    def emit_to_project(self, project_id: int, event: str, payload: Any) -> None:
        room = project_room(project_id)
        if not self._hub.has_listeners(room):
            return
        self._schedule(self._hub.send_to_room, room, _message(event, payload))

    def emit_to_all(self, event: str, payload: Any) -> None:
        if not self._hub.online_user_count():
            return
        self._schedule(self._hub.send_to_all, _message(event, payload))

    def _schedule(
        self, send: Callable[..., Awaitable[None]], *args: Any
    ) -> None:
        """Start delivery on the event loop without waiting for it.

        Request handlers run in anyio worker threads, so the task is handed to
        the loop with ``from_thread.run_sync``, which returns once it is created.
        """

        try:
            asyncio.get_running_loop()
        except RuntimeError:
            try:
                from_thread.run_sync(self._spawn, send, *args)
            except Exception:
                logger.warning("Unable to deliver realtime event", exc_info=True)
        else:
            self._spawn(send, *args)

    def _spawn(self, send: Callable[..., Awaitable[None]], *args: Any) -> None:
        task = asyncio.get_running_loop().create_task(send(*args))
        self._pending.add(task)
        task.add_done_callback(self._delivery_done)

    def _delivery_done(self, task: asyncio.Task) -> None:
        self._pending.discard(task)
        if not task.cancelled() and task.exception() is not None:
            logger.warning("Realtime delivery failed", exc_info=task.exception())


def _message(event: str, payload: Any) -> dict[str, Any]:
    return {"type": event, "data": copy.deepcopy(payload)}


def serialize_activity(activity: Activity) -> dict[str, Any]:
    """Return the websocket payload representation for ``activity``."""

    actor = activity.actor
    return {
        "id": activity.id,
        "type": activity.type.value,
        "userId": activity.actor_id,
        "projectId": activity.project_id,
        "metadata": dict(activity.metadata),
        "resourceLink": activity.resource_link,
        "createdAt": activity.created_at.isoformat() if activity.created_at else None,
        "isRead": activity.is_read,
        "user": {"id": actor.id, "name": actor.name, "avatarUrl": actor.avatar_url}
        if actor
        else None,
        "project": {"id": activity.project_id, "name": activity.project_name},
    }


def serialize_notification(notification: Notification) -> dict[str, Any]:
    """Return the websocket payload representation for ``notification``."""

    return {
        "id": notification.id,
        "type": notification.type.value,
        "title": notification.title,
        "message": notification.message,
        "resourceLink": notification.resource_link,
        "isRead": notification.is_read,
        "createdAt": notification.created_at.isoformat()
        if notification.created_at
        else None,
    }


__all__ = ["RealtimePublisher", "serialize_activity", "serialize_notification"]
