"""Read and acknowledge operations over a user's notifications."""

from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy.orm import Session

from mindmend.domain.entities import Notification
from mindmend.infrastructure.repositories import DEFAULT_LIST_LIMIT, NotificationRepository


class NotificationNotFoundError(ValueError):
    """Raised when a notification does not exist for the requesting user."""


def list_notifications(
    session: Session, *, recipient_id: int, limit: int = DEFAULT_LIST_LIMIT
) -> Sequence[Notification]:
    """Return the newest notifications of ``recipient_id``, newest first."""

    return NotificationRepository(session).list_for_user(recipient_id, limit=limit)


def mark_notification_read(
    session: Session, *, notification_id: int, recipient_id: int
) -> Notification:
    """Mark one notification as read; repeating the call is harmless."""

    notification = NotificationRepository(session).mark_as_read(
        notification_id, recipient_id=recipient_id
    )
    if notification is None:
        raise NotificationNotFoundError("Notification not found")
    return notification


def mark_all_notifications_read(session: Session, *, recipient_id: int) -> int:
    """Mark every unread notification of ``recipient_id`` as read."""

    return NotificationRepository(session).mark_all_as_read(recipient_id)


__all__ = [
    "NotificationNotFoundError",
    "list_notifications",
    "mark_notification_read",
    "mark_all_notifications_read",
]
