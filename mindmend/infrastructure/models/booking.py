"""SQLAlchemy model for session bookings."""

from sqlalchemy import Boolean, Column, Date, DateTime, ForeignKey, Integer, String, Text, Time
from sqlalchemy.sql import expression

from mindmend.domain.entities import BOOKING_STATUS_PENDING
from mindmend.infrastructure.database import Base
from mindmend.utils import now_utc_naive_datetime


class BookingModel(Base):
    """Database representation of a booked therapy session."""

    __tablename__ = "booking"

    id = Column(Integer, primary_key=True, index=True)
    patient_id = Column(Integer, ForeignKey("user.id"), nullable=False, index=True)
    therapist_id = Column(Integer, ForeignKey("user.id"), nullable=False, index=True)
    scheduled_date = Column(Date, nullable=False, index=True)
    scheduled_time = Column(Time, nullable=False)
    status = Column(String(20), nullable=False, default=BOOKING_STATUS_PENDING)
    notes = Column(Text, nullable=False, default="")
    reminder_sent = Column(
        Boolean, nullable=False, default=False, server_default=expression.false()
    )
    created_at = Column(DateTime, nullable=False, default=now_utc_naive_datetime)
    updated_at = Column(DateTime, nullable=True, onupdate=now_utc_naive_datetime)


__all__ = ["BookingModel"]
