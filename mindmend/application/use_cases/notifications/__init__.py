"""Public helpers for emitting and reading domain notifications."""

from .dispatcher import DispatchResult, NotificationValidationError, dispatch_notification
from .events import (
    notify_booking_requested,
    notify_booking_status_changed,
    notify_new_message,
    notify_prescription_sent,
    notify_session_reminder,
)
from .store import (
    NotificationNotFoundError,
    list_notifications,
    mark_all_notifications_read,
    mark_notification_read,
)

__all__ = [
    "DispatchResult",
    "NotificationValidationError",
    "dispatch_notification",
    "notify_booking_requested",
    "notify_booking_status_changed",
    "notify_new_message",
    "notify_prescription_sent",
    "notify_session_reminder",
    "NotificationNotFoundError",
    "list_notifications",
    "mark_notification_read",
    "mark_all_notifications_read",
]
