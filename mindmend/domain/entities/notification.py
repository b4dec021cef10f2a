"""Domain entity representing a user notification."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any


class NotificationType(str, Enum):
    """Kinds of events a notification can describe."""

    BOOKING_REQUEST = "booking_request"
    BOOKING_CONFIRMED = "booking_confirmed"
    SESSION_REMINDER = "session_reminder"
    NEW_MESSAGE = "new_message"
    SYSTEM = "system"

    @classmethod
    def parse(cls, value: "NotificationType | str") -> "NotificationType":
        """Return the member matching ``value`` or raise ``ValueError``."""

        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            allowed = ", ".join(member.value for member in cls)
            raise ValueError(
                f"Unknown notification type {value!r}; expected one of: {allowed}"
            ) from None


@dataclass
class Notification:
    """Information message addressed to exactly one recipient."""

    id: int | None
    recipient_id: int
    type: NotificationType
    title: str
    message: str
    read: bool = False
    link: str | None = None
    data: dict[str, Any] = field(default_factory=dict)
    created_at: datetime | None = None


__all__ = ["Notification", "NotificationType"]
