"""Endpoints and websocket handler for realtime notifications."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, WebSocket, WebSocketDisconnect, status
from sqlalchemy.orm import Session

from mindmend.application.use_cases.notifications import (
    NotificationNotFoundError,
    list_notifications,
    mark_all_notifications_read,
    mark_notification_read,
)
from mindmend.config import get_settings
from mindmend.domain.entities import Notification, User
from mindmend.infrastructure import database
from mindmend.infrastructure.database import get_db
from mindmend.infrastructure.notifications import connection_registry
from mindmend.interfaces.api.dependencies import get_current_user, resolve_current_user
from mindmend.interfaces.api.schemas import NotificationRead, NotificationsMarkedRead

router = APIRouter(prefix="/notifications", tags=["notifications"])
logger = logging.getLogger(__name__)

JOIN_EVENT = "join_user"
POLICY_VIOLATION = 1008


def _notification_to_schema(notification: Notification) -> NotificationRead:
    return NotificationRead(
        id=notification.id or 0,
        recipient_id=notification.recipient_id,
        type=notification.type,
        title=notification.title,
        message=notification.message,
        read=notification.read,
        link=notification.link,
        data=notification.data or {},
        created_at=notification.created_at,
    )


@router.get("/", response_model=list[NotificationRead])
def get_notifications(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> list[NotificationRead]:
    """Return the most recent notifications for the authenticated user."""

    notifications = list_notifications(
        db,
        recipient_id=current_user.id,
        limit=get_settings().notification_list_limit,
    )
    return [_notification_to_schema(notification) for notification in notifications]


@router.put("/read-all", response_model=NotificationsMarkedRead)
def read_all_notifications(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> NotificationsMarkedRead:
    """Mark every unread notification of the caller as read."""

    updated = mark_all_notifications_read(db, recipient_id=current_user.id)
    return NotificationsMarkedRead(updated=updated)


@router.put("/{notification_id}/read", response_model=NotificationRead)
def read_notification(
    notification_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> NotificationRead:
    """Mark a single notification as read."""

    try:
        notification = mark_notification_read(
            db, notification_id=notification_id, recipient_id=current_user.id
        )
    except NotificationNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    return _notification_to_schema(notification)


@router.websocket("/ws")
async def notifications_websocket(websocket: WebSocket) -> None:
    """Websocket endpoint that streams notifications to the authenticated user.

    The client proves its identity with ``?token=`` and then sends a
    ``join_user`` event naming that identity to start receiving pushes.
    """

    token = websocket.query_params.get("token")
    if not token:
        await websocket.close(code=POLICY_VIOLATION)
        return

    session = database.SessionLocal()
    try:
        user = resolve_current_user(token, session)
    except HTTPException:
        await websocket.close(code=POLICY_VIOLATION)
        return
    finally:
        session.close()

    await websocket.accept()
    try:
        while True:
            try:
                message = await websocket.receive_json()
            except WebSocketDisconnect:
                raise
            except (ValueError, KeyError):
                continue

            if not isinstance(message, dict):
                continue

            message_type = message.get("type")
            if message_type == "ping":
                await websocket.send_json({"type": "pong"})
                continue

            if message_type == JOIN_EVENT:
                requested = message.get("user_id")
                if str(requested) != str(user.id):
                    await websocket.send_json(
                        {"type": "error", "detail": "Can only join your own channel"}
                    )
                    continue
                if connection_registry.join(user.id, websocket):
                    logger.info("User %s joined their notification channel", user.id)
                await websocket.send_json({"type": "joined", "user_id": user.id})
                continue
    except WebSocketDisconnect:
        pass
    finally:
        connection_registry.leave(user.id, websocket)
