"""Single entry point used by domain actions to notify a user."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from mindmend.domain.entities import Notification, NotificationType
from mindmend.infrastructure.notifications import (
    NotificationPublisher,
    PushOutcome,
    notification_publisher,
)
from mindmend.infrastructure.repositories import NotificationRepository, UserRepository
from mindmend.utils import now_in_app_timezone

logger = logging.getLogger(__name__)


class NotificationValidationError(ValueError):
    """Raised when a notification request cannot be accepted."""


@dataclass(frozen=True)
class DispatchResult:
    """Outcome of :func:`dispatch_notification`.

    ``notification`` is the persisted record, or ``None`` when storing it
    failed (``error`` then holds the cause and no push was attempted).
    """

    notification: Notification | None
    error: Exception | None = None
    push: PushOutcome = field(default_factory=PushOutcome)

    @property
    def persisted(self) -> bool:
        return self.notification is not None

    @property
    def pushed(self) -> bool:
        return self.push.ok and (self.push.delivered > 0 or self.push.scheduled)


def dispatch_notification(
    session: Session,
    *,
    recipient_id: int,
    title: str,
    message: str,
    type: NotificationType | str,
    link: str | None = None,
    data: dict[str, Any] | None = None,
    publisher: NotificationPublisher | None = None,
) -> DispatchResult:
    """Persist a notification for ``recipient_id`` and push it if they are online.

    Validation problems raise :class:`NotificationValidationError` before
    anything is written. Storage failures are logged and reported on the
    result. The push is best effort and never changes the stored record.
    """

    try:
        notification_type = NotificationType.parse(type)
    except ValueError as exc:
        raise NotificationValidationError(str(exc)) from exc
    if not recipient_id:
        raise NotificationValidationError("A notification requires a recipient")
    if not (title or "").strip() or not (message or "").strip():
        raise NotificationValidationError("Notification title and message are required")

    try:
        if not UserRepository(session).exists(recipient_id):
            raise NotificationValidationError(f"Recipient {recipient_id} does not exist")
        saved = NotificationRepository(session).create(
            Notification(
                id=None,
                recipient_id=recipient_id,
                type=notification_type,
                title=title,
                message=message,
                read=False,
                link=link,
                data=dict(data or {}),
                created_at=now_in_app_timezone(),
            )
        )
    except SQLAlchemyError as exc:
        session.rollback()
        logger.exception(
            "Could not store %s notification for user %s",
            notification_type.value,
            recipient_id,
        )
        return DispatchResult(notification=None, error=exc)

    outcome = (publisher or notification_publisher).dispatch(saved)
    return DispatchResult(notification=saved, push=outcome)


__all__ = ["DispatchResult", "NotificationValidationError", "dispatch_notification"]
