"""ORM models used by the application infrastructure."""

from .user import UserModel
from .booking import BookingModel
from .chat_message import ChatMessageModel
from .notification import NotificationModel

__all__ = [
    "UserModel",
    "BookingModel",
    "ChatMessageModel",
    "NotificationModel",
]
