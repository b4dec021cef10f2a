"""Use case for accepting, rejecting, cancelling or completing bookings."""

from __future__ import annotations

from sqlalchemy.orm import Session

from mindmend.application.use_cases.notifications import notify_booking_status_changed
from mindmend.domain.entities import (
    BOOKING_STATUSES,
    BOOKING_STATUS_CANCELLED,
    Booking,
    User,
)
from mindmend.infrastructure.repositories import BookingRepository, UserRepository

from .errors import BookingNotFoundError, BookingPermissionError


def update_booking_status(
    session: Session,
    *,
    booking_id: int,
    actor: User,
    status: str,
    notes: str | None = None,
) -> Booking:
    """Change the status of a booking and notify the patient.

    Only the therapist may confirm, reject or complete a session; either
    participant may cancel it.
    """

    if status not in BOOKING_STATUSES:
        raise ValueError(f"Status must be one of: {', '.join(BOOKING_STATUSES)}")

    repository = BookingRepository(session)
    booking = repository.get(booking_id)
    if booking is None:
        raise BookingNotFoundError("Booking not found")
    if actor.id not in booking.participant_ids():
        raise BookingPermissionError("Not allowed to update this booking")
    if actor.id != booking.therapist_id and status != BOOKING_STATUS_CANCELLED:
        raise BookingPermissionError("Only the therapist can change this status")

    updated = repository.update_status(booking_id, status=status, notes=notes)
    therapist = UserRepository(session).get(updated.therapist_id)
    if therapist is not None:
        notify_booking_status_changed(session, booking=updated, therapist=therapist)
    return updated
