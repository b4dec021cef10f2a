"""Domain entities exposed by the application."""

from .booking import (
    BOOKING_STATUSES,
    BOOKING_STATUS_CANCELLED,
    BOOKING_STATUS_COMPLETED,
    BOOKING_STATUS_CONFIRMED,
    BOOKING_STATUS_PENDING,
    BOOKING_STATUS_REJECTED,
    Booking,
)
from .chat_message import MESSAGE_TYPE_PRESCRIPTION, MESSAGE_TYPE_TEXT, ChatMessage
from .notification import Notification, NotificationType
from .user import ROLE_PATIENT, ROLE_THERAPIST, USER_ROLES, User

__all__ = [
    "Booking",
    "BOOKING_STATUSES",
    "BOOKING_STATUS_PENDING",
    "BOOKING_STATUS_CONFIRMED",
    "BOOKING_STATUS_REJECTED",
    "BOOKING_STATUS_CANCELLED",
    "BOOKING_STATUS_COMPLETED",
    "ChatMessage",
    "MESSAGE_TYPE_TEXT",
    "MESSAGE_TYPE_PRESCRIPTION",
    "Notification",
    "NotificationType",
    "User",
    "ROLE_PATIENT",
    "ROLE_THERAPIST",
    "USER_ROLES",
]
