"""Booking schemas."""

from datetime import date, datetime, time
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

BookingStatus = Literal["pending", "confirmed", "rejected", "cancelled", "completed"]


class BookingCreate(BaseModel):
    therapist_id: int = Field(..., ge=1)
    scheduled_date: date
    scheduled_time: time
    notes: str = Field(default="", max_length=2000)

    model_config = ConfigDict(extra="forbid")


class BookingStatusUpdate(BaseModel):
    status: BookingStatus
    notes: str | None = Field(default=None, max_length=2000)


class BookingRead(BaseModel):
    id: int
    patient_id: int
    therapist_id: int
    scheduled_date: date
    scheduled_time: time
    status: BookingStatus
    notes: str = ""
    reminder_sent: bool = False
    created_at: datetime | None = None
    updated_at: datetime | None = None

    model_config = ConfigDict(from_attributes=True)
