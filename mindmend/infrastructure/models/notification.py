"""SQLAlchemy model for persisted notifications."""

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, JSON, String, Text
from sqlalchemy.sql import expression

from mindmend.infrastructure.database import Base
from mindmend.utils import now_utc_naive_datetime


class NotificationModel(Base):
    """Database representation for user notifications."""

    __tablename__ = "notification"

    id = Column(Integer, primary_key=True, index=True)
    recipient_id = Column(Integer, ForeignKey("user.id"), nullable=False, index=True)
    type = Column(String(30), nullable=False)
    title = Column(String(120), nullable=False)
    message = Column(Text, nullable=False)
    read = Column(
        Boolean, nullable=False, default=False, server_default=expression.false()
    )
    link = Column(String(255), nullable=True)
    data = Column(JSON, nullable=False, default=dict)
    created_at = Column(DateTime(), nullable=False, default=now_utc_naive_datetime)


__all__ = ["NotificationModel"]
