"""Use cases for managing session bookings."""

from .create_booking import create_booking
from .errors import BookingNotFoundError, BookingPermissionError
from .list_bookings import list_bookings
from .update_booking_status import update_booking_status

__all__ = [
    "BookingNotFoundError",
    "BookingPermissionError",
    "create_booking",
    "list_bookings",
    "update_booking_status",
]
