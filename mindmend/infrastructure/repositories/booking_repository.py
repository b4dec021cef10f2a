"""Persistence helpers for booking entities."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import date

from sqlalchemy import or_, update
from sqlalchemy.orm import Session

from mindmend.domain.entities import Booking
from mindmend.infrastructure.models import BookingModel
from mindmend.utils import from_utc_naive_datetime


class BookingRepository:
    """Provide CRUD operations for :class:`Booking` objects."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, booking_id: int) -> Booking | None:
        model = self.session.get(BookingModel, booking_id)
        return self._to_entity(model) if model else None

    def list_for_participant(self, user_id: int) -> Sequence[Booking]:
        query = (
            self.session.query(BookingModel)
            .filter(
                or_(
                    BookingModel.patient_id == user_id,
                    BookingModel.therapist_id == user_id,
                )
            )
            .order_by(
                BookingModel.scheduled_date.desc(),
                BookingModel.scheduled_time.desc(),
                BookingModel.id.desc(),
            )
        )
        return [self._to_entity(model) for model in query.all()]

    def list_pending_reminders(self, *, status: str, on: date) -> Sequence[Booking]:
        """Return bookings in ``status`` scheduled ``on`` without a reminder."""

        query = (
            self.session.query(BookingModel)
            .filter(
                BookingModel.status == status,
                BookingModel.scheduled_date == on,
                BookingModel.reminder_sent.is_(False),
            )
            .order_by(BookingModel.scheduled_time.asc(), BookingModel.id.asc())
        )
        return [self._to_entity(model) for model in query.all()]

    def create(self, booking: Booking) -> Booking:
        model = BookingModel(
            patient_id=booking.patient_id,
            therapist_id=booking.therapist_id,
            scheduled_date=booking.scheduled_date,
            scheduled_time=booking.scheduled_time,
            status=booking.status,
            notes=booking.notes or "",
            reminder_sent=booking.reminder_sent,
        )
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def update_status(
        self, booking_id: int, *, status: str, notes: str | None = None
    ) -> Booking:
        model = self.session.get(BookingModel, booking_id)
        if model is None:
            msg = f"Booking with id {booking_id} not found"
            raise ValueError(msg)
        model.status = status
        if notes:
            model.notes = notes
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def claim_reminder(self, booking_id: int) -> bool:
        """Atomically flip ``reminder_sent``; ``True`` only for the first caller."""

        result = self.session.execute(
            update(BookingModel)
            .where(
                BookingModel.id == booking_id,
                BookingModel.reminder_sent.is_(False),
            )
            .values(reminder_sent=True)
        )
        self.session.commit()
        return result.rowcount == 1

    @staticmethod
    def _to_entity(model: BookingModel) -> Booking:
        return Booking(
            id=model.id,
            patient_id=model.patient_id,
            therapist_id=model.therapist_id,
            scheduled_date=model.scheduled_date,
            scheduled_time=model.scheduled_time,
            status=model.status,
            notes=model.notes or "",
            reminder_sent=bool(model.reminder_sent),
            created_at=from_utc_naive_datetime(model.created_at),
            updated_at=from_utc_naive_datetime(model.updated_at),
        )


__all__ = ["BookingRepository"]
