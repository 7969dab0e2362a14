"""Connection registry and room fan-out for realtime websockets."""

from __future__ import annotations

import logging
import threading
from collections import defaultdict
from collections.abc import Iterable
from typing import Any, DefaultDict, Set

from fastapi import WebSocket

logger = logging.getLogger(__name__)


def user_room(user_id: int) -> str:
    return f"user:{user_id}"


def project_room(project_id: int) -> str:
    return f"project:{project_id}"


class RealtimeHub:
    """Track live sockets per user and their project room memberships.

    Every socket joins its personal ``user:{id}`` room plus one ``project:{id}``
    room per project it may see. Request handlers run in worker threads while
    sockets are served on the event loop, so all bookkeeping goes through a lock
    and sends happen on a snapshot taken under it.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._connections: DefaultDict[int, Set[WebSocket]] = defaultdict(set)
        self._rooms: DefaultDict[str, Set[WebSocket]] = defaultdict(set)
        self._socket_rooms: dict[WebSocket, set[str]] = {}
        self._socket_users: dict[WebSocket, int] = {}

    async def connect(
        self, user_id: int, websocket: WebSocket, project_ids: Iterable[int] = ()
    ) -> None:
        """Accept ``websocket`` and register it for ``user_id``."""

        await websocket.accept()
        self.register(user_id, websocket, project_ids)

    def register(
        self, user_id: int, websocket: WebSocket, project_ids: Iterable[int] = ()
    ) -> None:
        with self._lock:
            self._connections[user_id].add(websocket)
            self._socket_users[websocket] = user_id
            self._socket_rooms[websocket] = set()
            self._join(websocket, user_room(user_id))
            for project_id in project_ids:
                self._join(websocket, project_room(project_id))
        logger.debug("User %s connected to realtime hub", user_id)

    def disconnect(self, websocket: WebSocket) -> None:
        """Forget ``websocket`` and drop it from every room it joined."""

        with self._lock:
            user_id = self._socket_users.pop(websocket, None)
            for room in self._socket_rooms.pop(websocket, set()):
                members = self._rooms.get(room)
                if members is None:
                    continue
                members.discard(websocket)
                if not members:
                    self._rooms.pop(room, None)
            if user_id is None:
                return
            connections = self._connections.get(user_id)
            if connections is not None:
                connections.discard(websocket)
                if not connections:
                    self._connections.pop(user_id, None)
        logger.debug("User %s disconnected from realtime hub", user_id)

    def is_user_online(self, user_id: int) -> bool:
        with self._lock:
            return bool(self._connections.get(user_id))

    def online_user_count(self) -> int:
        with self._lock:
            return len(self._connections)

    def has_listeners(self, room: str) -> bool:
        with self._lock:
            return bool(self._rooms.get(room))

    def join_project_room(self, user_id: int, project_id: int) -> None:
        """Subscribe every live socket of ``user_id`` to the project's room."""

        room = project_room(project_id)
        with self._lock:
            for websocket in self._connections.get(user_id, set()):
                self._join(websocket, room)

    def leave_project_room(self, user_id: int, project_id: int) -> None:
        room = project_room(project_id)
        with self._lock:
            for websocket in self._connections.get(user_id, set()):
                self._socket_rooms.get(websocket, set()).discard(room)
                members = self._rooms.get(room)
                if members is not None:
                    members.discard(websocket)
                    if not members:
                        self._rooms.pop(room, None)

    def rooms_for(self, websocket: WebSocket) -> set[str]:
        with self._lock:
            return set(self._socket_rooms.get(websocket, set()))

    async def send_to_room(self, room: str, message: dict[str, Any]) -> None:
        with self._lock:
            targets = list(self._rooms.get(room, set()))
        await self._send(targets, message)

    async def send_to_user(self, user_id: int, message: dict[str, Any]) -> None:
        await self.send_to_room(user_room(user_id), message)

    async def send_to_all(self, message: dict[str, Any]) -> None:
        with self._lock:
            targets = list(self._socket_users)
        await self._send(targets, message)

    def _join(self, websocket: WebSocket, room: str) -> None:
        self._rooms[room].add(websocket)
        self._socket_rooms.setdefault(websocket, set()).add(room)

    async def _send(self, targets: list[WebSocket], message: dict[str, Any]) -> None:
        for websocket in targets:
            try:
                await websocket.send_json(message)
            except Exception:
                logger.warning("Dropping realtime socket after failed send", exc_info=True)
                self.disconnect(websocket)


__all__ = ["RealtimeHub", "project_room", "user_room"]
