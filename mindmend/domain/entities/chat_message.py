"""Domain entity representing a direct chat message."""

from dataclasses import dataclass
from datetime import datetime
from typing import Any

MESSAGE_TYPE_TEXT = "text"
MESSAGE_TYPE_PRESCRIPTION = "prescription"


@dataclass
class ChatMessage:
    """Text or a prescription sent from one user to another."""

    id: int | None
    sender_id: int
    recipient_id: int
    content: str
    created_at: datetime | None = None
    message_type: str = MESSAGE_TYPE_TEXT
    prescription: dict[str, Any] | None = None


__all__ = ["ChatMessage", "MESSAGE_TYPE_PRESCRIPTION", "MESSAGE_TYPE_TEXT"]
