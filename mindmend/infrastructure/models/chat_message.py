"""SQLAlchemy model for direct chat messages."""

from sqlalchemy import JSON, Column, DateTime, ForeignKey, Integer, String, Text

from mindmend.infrastructure.database import Base
from mindmend.utils import now_utc_naive_datetime


class ChatMessageModel(Base):
    __tablename__ = "chat_message"

    id = Column(Integer, primary_key=True, index=True)
    sender_id = Column(Integer, ForeignKey("user.id"), nullable=False, index=True)
    recipient_id = Column(Integer, ForeignKey("user.id"), nullable=False, index=True)
    content = Column(Text, nullable=False)
    message_type = Column(String(20), nullable=False, default="text", server_default="text")
    prescription = Column(JSON, nullable=True)
    created_at = Column(DateTime, nullable=False, default=now_utc_naive_datetime)


__all__ = ["ChatMessageModel"]
