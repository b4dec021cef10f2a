"""Pydantic models describing notification payloads."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field

from mindmend.domain.entities import NotificationType


class NotificationRead(BaseModel):
    """Representation of a notification delivered to the client."""

    id: int
    recipient_id: int
    type: NotificationType
    title: str
    message: str
    read: bool = False
    link: str | None = None
    data: dict[str, Any] = Field(default_factory=dict)
    created_at: datetime


class NotificationsMarkedRead(BaseModel):
    """Result of acknowledging every unread notification at once."""

    updated: int = Field(..., ge=0, description="Number of notifications flagged as read")


__all__ = ["NotificationRead", "NotificationsMarkedRead"]
