"""Errors raised by booking use cases."""


class BookingNotFoundError(ValueError):
    """Raised when a booking does not exist."""


class BookingPermissionError(ValueError):
    """Raised when a user acts on a booking they may not change."""
