"""Utility helpers to push notifications to websocket subscribers."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Any, Hashable

import anyio
from anyio import from_thread

from mindmend.domain.entities import Notification

from .manager import ConnectionRegistry, connection_registry

NOTIFICATION_EVENT = "notification_received"

logger = logging.getLogger(__name__)

_pending_tasks: set[asyncio.Task] = set()


@dataclass(frozen=True)
class PushOutcome:
    """What happened to a best-effort realtime push.

    ``delivered`` counts the connections reached. When the push was issued from
    inside the event loop it is only ``scheduled`` and the count is unknown.
    """

    delivered: int = 0
    scheduled: bool = False
    error: Exception | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


def deliver(
    registry: ConnectionRegistry, identity: Hashable, message: dict[str, Any]
) -> PushOutcome:
    """Publish ``message`` on the channel of ``identity`` from any context."""

    try:
        loop = asyncio.get_running_loop()
    except RuntimeError:
        pass
    else:
        task = loop.create_task(registry.publish(identity, message))
        _pending_tasks.add(task)
        task.add_done_callback(_pending_tasks.discard)
        return PushOutcome(scheduled=True)

    try:
        delivered = from_thread.run(registry.publish, identity, message)
    except RuntimeError:
        # Not an anyio worker thread (scripts, plain unit tests): no loop owns
        # the connections, so run the publish on a private loop.
        delivered = anyio.run(registry.publish, identity, message)
    return PushOutcome(delivered=delivered)


class NotificationPublisher:
    """Serialize notifications and push them to the recipient's channel."""

    def __init__(self, registry: ConnectionRegistry) -> None:
        self._registry = registry

    def dispatch(self, notification: Notification) -> PushOutcome:
        """Push ``notification`` to its recipient; never raises."""

        message = {"type": NOTIFICATION_EVENT, "data": self._serialize(notification)}
        try:
            outcome = deliver(self._registry, notification.recipient_id, message)
        except Exception as exc:
            logger.warning(
                "Realtime push of notification %s to user %s failed",
                notification.id,
                notification.recipient_id,
                exc_info=True,
            )
            return PushOutcome(error=exc)

        if outcome.delivered:
            logger.info(
                "Notification %s sent to user %s on %d connection(s)",
                notification.id,
                notification.recipient_id,
                outcome.delivered,
            )
        return outcome

    @staticmethod
    def _serialize(notification: Notification) -> dict[str, Any]:
        return {
            "id": notification.id,
            "recipient_id": notification.recipient_id,
            "type": notification.type.value,
            "title": notification.title,
            "message": notification.message,
            "read": notification.read,
            "link": notification.link,
            "data": dict(notification.data or {}),
            "created_at": notification.created_at.isoformat()
            if notification.created_at
            else None,
        }


notification_publisher = NotificationPublisher(connection_registry)


__all__ = [
    "NOTIFICATION_EVENT",
    "NotificationPublisher",
    "PushOutcome",
    "deliver",
    "notification_publisher",
]
