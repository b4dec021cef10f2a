from .auth import Token
from .booking import BookingCreate, BookingRead, BookingStatusUpdate
from .message import ChatMessageCreate, ChatMessageRead, Medication, PrescriptionCreate
from .notification import NotificationRead, NotificationsMarkedRead
from .user import UserCreate, UserRead

__all__ = [
    "Token",
    "BookingCreate",
    "BookingRead",
    "BookingStatusUpdate",
    "ChatMessageCreate",
    "ChatMessageRead",
    "Medication",
    "PrescriptionCreate",
    "NotificationRead",
    "NotificationsMarkedRead",
    "UserCreate",
    "UserRead",
]
