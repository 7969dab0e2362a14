"""Websocket endpoint streaming activities and notifications."""

from __future__ import annotations

import logging

from fastapi import APIRouter, HTTPException, WebSocket, WebSocketDisconnect

from app.application.errors import NotFoundError
from app.application.use_cases.notifications import mark_notification_read
from app.infrastructure.database import SessionLocal
from app.infrastructure.realtime import RealtimeHub, serialize_notification
from app.infrastructure.repositories import NotificationRepository, ProjectRepository
from app.interfaces.api.dependencies import ACCESS_TOKEN_COOKIE, resolve_current_user

router = APIRouter(tags=["realtime"])
logger = logging.getLogger(__name__)

POLICY_VIOLATION = 1008
INTERNAL_ERROR = 1011


@router.websocket("/ws")
async def realtime_websocket(websocket: WebSocket) -> None:
    """Authenticate once, join the user's rooms and serve client messages.

    The token comes from the ``token`` query parameter or the access token
    cookie; connections without a valid token are closed with 1008.
    """

    hub: RealtimeHub = websocket.app.state.realtime_hub
    token = websocket.query_params.get("token") or websocket.cookies.get(
        ACCESS_TOKEN_COOKIE
    )
    if not token:
        await websocket.close(code=POLICY_VIOLATION)
        return

    session = SessionLocal()
    try:
        user = resolve_current_user(token, session)
        projects = ProjectRepository(session)
        project_ids = (
            projects.list_all_ids()
            if user.is_admin()
            else projects.list_member_project_ids(user.id)
        )
        pending_notifications = NotificationRepository(session).list_for_user(
            user.id, unread_only=True
        )
    except HTTPException:
        await websocket.close(code=POLICY_VIOLATION)
        return
    except Exception:
        logger.exception("Failed to open realtime connection")
        await websocket.close(code=INTERNAL_ERROR)
        return
    finally:
        session.close()

    await hub.connect(user.id, websocket, project_ids)
    logger.info("User %s connected with %s project rooms", user.id, len(project_ids))
    try:
        if pending_notifications:
            await websocket.send_json(
                {
                    "type": "init",
                    "data": [serialize_notification(n) for n in pending_notifications],
                }
            )
        while True:
            try:
                message = await websocket.receive_json()
            except WebSocketDisconnect:
                raise
            except ValueError:
                continue

            if not isinstance(message, dict):
                continue

            message_type = message.get("type")
            if message_type == "ping":
                await websocket.send_json({"type": "pong"})
                continue

            if message_type == "notification:read":
                _mark_notification_read(user.id, message.get("data"))
    except WebSocketDisconnect:
        pass
    finally:
        hub.disconnect(websocket)
        logger.info("User %s disconnected", user.id)


def _mark_notification_read(user_id: int, data: object) -> None:
    notification_id = data.get("id") if isinstance(data, dict) else data
    try:
        notification_id = int(notification_id)
    except (TypeError, ValueError):
        return

    session = SessionLocal()
    try:
        mark_notification_read(session, user_id, notification_id)
    except NotFoundError:
        logger.debug("Ignoring read mark for unknown notification %s", notification_id)
    finally:
        session.close()
