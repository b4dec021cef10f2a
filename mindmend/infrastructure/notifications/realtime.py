"""Helpers to broadcast non-persisted realtime events to connected clients."""

from __future__ import annotations

import copy
import logging
from typing import Any, Iterable, Set

from .manager import ConnectionRegistry, connection_registry
from .publisher import PushOutcome, deliver

logger = logging.getLogger(__name__)


class RealtimeEventPublisher:
    """Dispatch structured realtime events to websocket subscribers."""

    def __init__(self, registry: ConnectionRegistry) -> None:
        self._registry = registry

    def dispatch(self, user_id: int, *, event_type: str, payload: Any) -> PushOutcome:
        """Push an ``event_type`` event to ``user_id``; never raises."""

        if not user_id:
            return PushOutcome()

        message = {"type": event_type, "data": copy.deepcopy(payload)}
        try:
            return deliver(self._registry, user_id, message)
        except Exception as exc:
            logger.warning(
                "Realtime %s event for user %s failed", event_type, user_id, exc_info=True
            )
            return PushOutcome(error=exc)

    def dispatch_many(
        self,
        user_ids: Iterable[int],
        *,
        event_type: str,
        payload: Any,
    ) -> None:
        """Broadcast an event to multiple ``user_ids``."""

        seen: Set[int] = set()
        for user_id in user_ids:
            if not user_id or user_id in seen:
                continue
            seen.add(user_id)
            self.dispatch(user_id, event_type=event_type, payload=payload)


realtime_event_publisher = RealtimeEventPublisher(connection_registry)


def dispatch_realtime_event(
    user_ids: Iterable[int], *, event_type: str, payload: Any
) -> None:
    """Public helper to broadcast realtime events to ``user_ids``."""

    realtime_event_publisher.dispatch_many(
        user_ids, event_type=event_type, payload=payload
    )


__all__ = [
    "RealtimeEventPublisher",
    "realtime_event_publisher",
    "dispatch_realtime_event",
]
