"""Client-side mirror of a user's notifications and unread count.

State changes are expressed as actions reduced by :func:`reduce`. The two
read acknowledgements are applied optimistically by the client, so
:meth:`NotificationCache.apply` hands back the action that undoes them.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import Any, Iterable, Mapping, Union


@dataclass(frozen=True)
class CachedNotification:
    id: int
    type: str
    title: str
    message: str
    read: bool = False
    link: str | None = None
    data: Mapping[str, Any] = field(default_factory=dict)
    created_at: datetime | None = None

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "CachedNotification":
        """Build an entry from the JSON shape used by the API and pushes."""

        created_at = payload.get("created_at")
        if isinstance(created_at, str):
            created_at = datetime.fromisoformat(created_at.replace("Z", "+00:00"))
        return cls(
            id=int(payload["id"]),
            type=str(payload["type"]),
            title=str(payload.get("title", "")),
            message=str(payload.get("message", "")),
            read=bool(payload.get("read", False)),
            link=payload.get("link"),
            data=dict(payload.get("data") or {}),
            created_at=created_at,
        )


@dataclass(frozen=True)
class NotificationCacheState:
    notifications: tuple[CachedNotification, ...] = ()
    unread_count: int = 0


@dataclass(frozen=True)
class NotificationsLoaded:
    notifications: tuple[CachedNotification, ...]


@dataclass(frozen=True)
class NotificationReceived:
    notification: CachedNotification


@dataclass(frozen=True)
class NotificationMarkedRead:
    notification_id: int


@dataclass(frozen=True)
class AllNotificationsMarkedRead:
    pass


@dataclass(frozen=True)
class ReadStateReverted:
    """Flip ``notification_ids`` back to unread and add ``restored_count`` back."""

    notification_ids: tuple[int, ...]
    restored_count: int


CacheAction = Union[
    NotificationsLoaded,
    NotificationReceived,
    NotificationMarkedRead,
    AllNotificationsMarkedRead,
    ReadStateReverted,
]


def reduce(state: NotificationCacheState, action: CacheAction) -> NotificationCacheState:
    """Return the state that results from applying ``action`` to ``state``."""

    if isinstance(action, NotificationsLoaded):
        items = tuple(action.notifications)
        return NotificationCacheState(
            notifications=items,
            unread_count=sum(1 for item in items if not item.read),
        )

    if isinstance(action, NotificationReceived):
        # Duplicate deliveries of the same id are kept as separate entries.
        return NotificationCacheState(
            notifications=(action.notification, *state.notifications),
            unread_count=state.unread_count + 1,
        )

    if isinstance(action, NotificationMarkedRead):
        was_unread = any(
            item.id == action.notification_id and not item.read
            for item in state.notifications
        )
        return NotificationCacheState(
            notifications=tuple(
                replace(item, read=True) if item.id == action.notification_id else item
                for item in state.notifications
            ),
            unread_count=max(0, state.unread_count - 1) if was_unread else state.unread_count,
        )

    if isinstance(action, AllNotificationsMarkedRead):
        return NotificationCacheState(
            notifications=tuple(replace(item, read=True) for item in state.notifications),
            unread_count=0,
        )

    if isinstance(action, ReadStateReverted):
        ids = set(action.notification_ids)
        return NotificationCacheState(
            notifications=tuple(
                replace(item, read=False) if item.id in ids and item.read else item
                for item in state.notifications
            ),
            unread_count=state.unread_count + action.restored_count,
        )

    raise TypeError(f"Unsupported notification cache action: {action!r}")


def _undo_for(
    before: NotificationCacheState,
    after: NotificationCacheState,
    action: CacheAction,
) -> ReadStateReverted | None:
    if isinstance(action, NotificationMarkedRead):
        flipped = (action.notification_id,) if any(
            item.id == action.notification_id and not item.read
            for item in before.notifications
        ) else ()
    elif isinstance(action, AllNotificationsMarkedRead):
        flipped = tuple(dict.fromkeys(
            item.id for item in before.notifications if not item.read
        ))
    else:
        return None
    if not flipped:
        return None
    # Duplicate entries share an id but were counted once by the mark.
    return ReadStateReverted(flipped, before.unread_count - after.unread_count)


class NotificationCache:
    """Thread-safe holder of :class:`NotificationCacheState`.

    Pushes may arrive on a listener thread while the UI thread acknowledges
    notifications, so every transition goes through a lock.
    """

    def __init__(self, state: NotificationCacheState | None = None) -> None:
        self._state = state or NotificationCacheState()
        self._lock = threading.Lock()

    @property
    def state(self) -> NotificationCacheState:
        return self._state

    @property
    def notifications(self) -> tuple[CachedNotification, ...]:
        return self._state.notifications

    @property
    def unread_count(self) -> int:
        return self._state.unread_count

    def apply(self, action: CacheAction) -> ReadStateReverted | None:
        """Apply ``action`` and return the action that reverts it, if any."""

        with self._lock:
            before = self._state
            self._state = reduce(before, action)
            return _undo_for(before, self._state, action)

    def load(self, payloads: Iterable[Mapping[str, Any]]) -> None:
        self.apply(
            NotificationsLoaded(
                tuple(CachedNotification.from_payload(payload) for payload in payloads)
            )
        )

    def receive(self, payload: Mapping[str, Any]) -> None:
        self.apply(NotificationReceived(CachedNotification.from_payload(payload)))


__all__ = [
    "AllNotificationsMarkedRead",
    "CacheAction",
    "CachedNotification",
    "NotificationCache",
    "NotificationCacheState",
    "NotificationMarkedRead",
    "NotificationReceived",
    "NotificationsLoaded",
    "ReadStateReverted",
    "reduce",
]
