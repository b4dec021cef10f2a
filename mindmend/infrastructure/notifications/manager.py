"""Connection registry grouping live websocket connections by user."""

from __future__ import annotations

import logging
from collections import defaultdict
from typing import Any, DefaultDict, Hashable, Protocol, Set

logger = logging.getLogger(__name__)


class PushConnection(Protocol):
    """Anything able to receive a JSON message, such as a Starlette ``WebSocket``."""

    async def send_json(self, data: Any) -> None: ...


class ConnectionRegistry:
    """Map a user identity to the live connections joined to its channel.

    A channel is keyed by ``str(identity)`` so ``5`` and ``"5"`` address the
    same user. Membership is only changed through :meth:`join` and
    :meth:`leave`, which the websocket endpoint calls on open and close.
    """

    def __init__(self) -> None:
        self._channels: DefaultDict[str, Set[PushConnection]] = defaultdict(set)

    @staticmethod
    def channel_name(identity: Hashable) -> str:
        return str(identity)

    def join(self, identity: Hashable, connection: PushConnection) -> bool:
        """Add ``connection`` to the channel of ``identity``.

        Returns ``False`` when the connection had already joined; joining twice
        has no further effect.
        """

        members = self._channels[self.channel_name(identity)]
        if connection in members:
            return False
        members.add(connection)
        return True

    def leave(self, identity: Hashable, connection: PushConnection) -> None:
        """Remove ``connection`` from the channel of ``identity``."""

        name = self.channel_name(identity)
        members = self._channels.get(name)
        if members is None:
            return
        members.discard(connection)
        if not members:
            self._channels.pop(name, None)

    def connections_for(self, identity: Hashable) -> list[PushConnection]:
        return list(self._channels.get(self.channel_name(identity), ()))

    def is_joined(self, identity: Hashable, connection: PushConnection) -> bool:
        return connection in self._channels.get(self.channel_name(identity), ())

    def channel_count(self) -> int:
        return len(self._channels)

    async def publish(self, identity: Hashable, message: dict[str, Any]) -> int:
        """Send ``message`` to every connection joined to ``identity``.

        Connections are served one after another so messages published in
        order reach each connection in that order. A connection that fails to
        receive is dropped from the channel. Returns how many connections got
        the message; ``0`` means it was discarded.
        """

        delivered = 0
        for connection in self.connections_for(identity):
            try:
                await connection.send_json(message)
            except Exception:
                logger.warning(
                    "Dropping connection on channel %s after a failed send",
                    self.channel_name(identity),
                    exc_info=True,
                )
                self.leave(identity, connection)
            else:
                delivered += 1
        return delivered

    def clear(self) -> None:
        self._channels.clear()


connection_registry = ConnectionRegistry()


__all__ = ["ConnectionRegistry", "PushConnection", "connection_registry"]
