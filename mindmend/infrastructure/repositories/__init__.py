"""Repository implementations for infrastructure layer."""

from .booking_repository import BookingRepository
from .chat_message_repository import ChatMessageRepository
from .notification_repository import DEFAULT_LIST_LIMIT, NotificationRepository
from .user_repository import UserRepository

__all__ = [
    "BookingRepository",
    "ChatMessageRepository",
    "DEFAULT_LIST_LIMIT",
    "NotificationRepository",
    "UserRepository",
]
