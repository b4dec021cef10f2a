"""HTTP client that keeps a :class:`NotificationCache` in sync with the API."""

from __future__ import annotations

import logging
from typing import Any, Mapping

import httpx

from .notification_cache import (
    AllNotificationsMarkedRead,
    CacheAction,
    NotificationCache,
    NotificationMarkedRead,
)

logger = logging.getLogger(__name__)

PUSH_EVENT = "notification_received"


class NotificationsClient:
    """Fetch, receive and acknowledge notifications for one signed-in user.

    Acknowledgements update the cache first and call the server afterwards;
    a rejected call reverts exactly the optimistic change. Failures are
    logged and reported through the boolean return values.
    """

    def __init__(
        self,
        http: httpx.Client,
        *,
        token: str,
        cache: NotificationCache | None = None,
        base_path: str = "/notifications",
    ) -> None:
        self._http = http
        self._headers = {"Authorization": f"Bearer {token}"}
        self._base_path = base_path.rstrip("/")
        self.cache = cache or NotificationCache()

    def refresh(self) -> bool:
        """Reload the full list from the server."""

        try:
            response = self._http.get(f"{self._base_path}/", headers=self._headers)
            response.raise_for_status()
        except httpx.HTTPError:
            logger.exception("Error fetching notifications")
            return False
        self.cache.load(response.json())
        return True

    def handle_event(self, event: Mapping[str, Any]) -> bool:
        """Feed a websocket message; returns ``True`` when it was a push."""

        if event.get("type") != PUSH_EVENT or not isinstance(event.get("data"), Mapping):
            return False
        self.cache.receive(event["data"])
        return True

    def mark_read(self, notification_id: int) -> bool:
        return self._optimistic(
            NotificationMarkedRead(notification_id),
            f"{self._base_path}/{notification_id}/read",
        )

    def mark_all_read(self) -> bool:
        return self._optimistic(AllNotificationsMarkedRead(), f"{self._base_path}/read-all")

    def _optimistic(self, action: CacheAction, path: str) -> bool:
        undo = self.cache.apply(action)
        try:
            response = self._http.put(path, headers=self._headers)
            response.raise_for_status()
        except httpx.HTTPError:
            logger.exception("Server rejected %s; reverting local state", type(action).__name__)
            if undo is not None:
                self.cache.apply(undo)
            return False
        return True


__all__ = ["NotificationsClient", "PUSH_EVENT"]
