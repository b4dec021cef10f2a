"""Persistence helpers for notification entities."""

from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy.orm import Session

from mindmend.domain.entities import Notification, NotificationType
from mindmend.infrastructure.models import NotificationModel
from mindmend.utils import (
    from_utc_naive_datetime,
    now_utc_naive_datetime,
    to_utc_naive_datetime,
)

DEFAULT_LIST_LIMIT = 50


class NotificationRepository:
    """Provide CRUD operations for :class:`Notification` objects."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def list_for_user(
        self,
        recipient_id: int,
        *,
        limit: int | None = DEFAULT_LIST_LIMIT,
    ) -> Sequence[Notification]:
        """Return the newest notifications owned by ``recipient_id``."""

        query = (
            self.session.query(NotificationModel)
            .filter(NotificationModel.recipient_id == recipient_id)
            .order_by(NotificationModel.created_at.desc(), NotificationModel.id.desc())
        )
        if limit is not None:
            query = query.limit(limit)
        return [self._to_entity(model) for model in query.all()]

    def count_unread(self, recipient_id: int) -> int:
        return (
            self.session.query(NotificationModel)
            .filter(
                NotificationModel.recipient_id == recipient_id,
                NotificationModel.read.is_(False),
            )
            .count()
        )

    def get(self, notification_id: int) -> Notification | None:
        model = self.session.get(NotificationModel, notification_id)
        return self._to_entity(model) if model else None

    def create(self, notification: Notification) -> Notification:
        model = NotificationModel(
            recipient_id=notification.recipient_id,
            type=NotificationType.parse(notification.type).value,
            title=notification.title,
            message=notification.message,
            read=False,
            link=notification.link,
            data=dict(notification.data or {}),
            created_at=to_utc_naive_datetime(notification.created_at)
            or now_utc_naive_datetime(),
        )
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def mark_as_read(
        self, notification_id: int, *, recipient_id: int
    ) -> Notification | None:
        """Flag one notification as read.

        Marking an already read notification is a no-op that still returns the
        record. ``None`` means the id does not exist for ``recipient_id``.
        """

        model = (
            self.session.query(NotificationModel)
            .filter(
                NotificationModel.id == notification_id,
                NotificationModel.recipient_id == recipient_id,
            )
            .one_or_none()
        )
        if model is None:
            return None
        if not model.read:
            model.read = True
            self.session.commit()
            self.session.refresh(model)
        return self._to_entity(model)

    def mark_all_as_read(self, recipient_id: int) -> int:
        """Flag every unread notification of ``recipient_id``; return the count."""

        updated = (
            self.session.query(NotificationModel)
            .filter(
                NotificationModel.recipient_id == recipient_id,
                NotificationModel.read.is_(False),
            )
            .update({NotificationModel.read: True}, synchronize_session=False)
        )
        self.session.commit()
        return updated

    @staticmethod
    def _to_entity(model: NotificationModel) -> Notification:
        return Notification(
            id=model.id,
            recipient_id=model.recipient_id,
            type=NotificationType(model.type),
            title=model.title,
            message=model.message,
            read=bool(model.read),
            link=model.link,
            data=dict(model.data or {}),
            created_at=from_utc_naive_datetime(model.created_at),
        )


__all__ = ["NotificationRepository", "DEFAULT_LIST_LIMIT"]
