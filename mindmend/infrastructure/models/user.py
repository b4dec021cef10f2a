"""SQLAlchemy model for the user table."""

from sqlalchemy import Column, DateTime, Integer, String

from mindmend.infrastructure.database import Base
from mindmend.utils import now_utc_naive_datetime


class UserModel(Base):
    """Database representation of a patient or therapist account."""

    __tablename__ = "user"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(80), nullable=False)
    email = Column(String(120), nullable=False, unique=True, index=True)
    password = Column(String(255), nullable=False)
    role = Column(String(20), nullable=False)
    created_at = Column(DateTime, nullable=False, default=now_utc_naive_datetime)
