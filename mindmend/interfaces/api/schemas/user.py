"""User schemas."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, EmailStr, Field


class UserBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=80)
    email: EmailStr


class UserCreate(UserBase):
    password: str = Field(..., min_length=8)
    role: Literal["patient", "therapist"]

    model_config = ConfigDict(extra="forbid")


class UserRead(UserBase):
    id: int
    role: str
    created_at: datetime | None = None

    model_config = ConfigDict(from_attributes=True)
