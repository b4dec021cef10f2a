"""Client-side helpers that mirror notifications delivered by the API."""

from .notification_cache import (
    AllNotificationsMarkedRead,
    CachedNotification,
    NotificationCache,
    NotificationCacheState,
    NotificationMarkedRead,
    NotificationReceived,
    NotificationsLoaded,
    ReadStateReverted,
    reduce,
)
from .notifications_client import NotificationsClient

__all__ = [
    "AllNotificationsMarkedRead",
    "CachedNotification",
    "NotificationCache",
    "NotificationCacheState",
    "NotificationMarkedRead",
    "NotificationReceived",
    "NotificationsLoaded",
    "NotificationsClient",
    "ReadStateReverted",
    "reduce",
]
