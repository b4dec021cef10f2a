"""Domain entity representing a therapy session booking."""

from dataclasses import dataclass
from datetime import date, datetime, time

BOOKING_STATUS_PENDING = "pending"
BOOKING_STATUS_CONFIRMED = "confirmed"
BOOKING_STATUS_REJECTED = "rejected"
BOOKING_STATUS_CANCELLED = "cancelled"
BOOKING_STATUS_COMPLETED = "completed"

BOOKING_STATUSES = (
    BOOKING_STATUS_PENDING,
    BOOKING_STATUS_CONFIRMED,
    BOOKING_STATUS_REJECTED,
    BOOKING_STATUS_CANCELLED,
    BOOKING_STATUS_COMPLETED,
)


@dataclass
class Booking:
    """A session requested by a patient with a therapist."""

    id: int | None
    patient_id: int
    therapist_id: int
    scheduled_date: date
    scheduled_time: time
    status: str = BOOKING_STATUS_PENDING
    notes: str = ""
    reminder_sent: bool = False
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def participant_ids(self) -> tuple[int, int]:
        return (self.patient_id, self.therapist_id)


__all__ = [
    "Booking",
    "BOOKING_STATUSES",
    "BOOKING_STATUS_PENDING",
    "BOOKING_STATUS_CONFIRMED",
    "BOOKING_STATUS_REJECTED",
    "BOOKING_STATUS_CANCELLED",
    "BOOKING_STATUS_COMPLETED",
]
