"""Use case for requesting a therapy session."""

from __future__ import annotations

from datetime import date, time

from sqlalchemy.orm import Session

from mindmend.application.use_cases.notifications import notify_booking_requested
from mindmend.domain.entities import BOOKING_STATUS_PENDING, Booking, User
from mindmend.infrastructure.repositories import BookingRepository, UserRepository


def create_booking(
    session: Session,
    *,
    patient: User,
    therapist_id: int,
    scheduled_date: date,
    scheduled_time: time,
    notes: str = "",
) -> Booking:
    """Store a pending booking and notify the therapist."""

    therapist = UserRepository(session).get(therapist_id)
    if therapist is None or not therapist.is_therapist():
        raise ValueError("Therapist not found")
    if therapist.id == patient.id:
        raise ValueError("Cannot book a session with yourself")

    booking = BookingRepository(session).create(
        Booking(
            id=None,
            patient_id=patient.id,
            therapist_id=therapist.id,
            scheduled_date=scheduled_date,
            scheduled_time=scheduled_time,
            status=BOOKING_STATUS_PENDING,
            notes=notes or "",
        )
    )
    notify_booking_requested(session, booking=booking, patient=patient)
    return booking
