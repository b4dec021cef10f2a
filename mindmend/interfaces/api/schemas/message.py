"""Chat message schemas."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class ChatMessageCreate(BaseModel):
    recipient_id: int = Field(..., ge=1)
    content: str = Field(..., min_length=1, max_length=5000)


class Medication(BaseModel):
    name: str = Field(..., min_length=1, max_length=120)
    dosage: str | None = None
    frequency: str | None = None
    duration: str | None = None
    instructions: str | None = None


class PrescriptionCreate(BaseModel):
    recipient_id: int = Field(..., ge=1)
    medications: list[Medication] = Field(..., min_length=1)
    diagnosis: str | None = None
    notes: str | None = None


class ChatMessageRead(BaseModel):
    id: int
    sender_id: int
    recipient_id: int
    content: str
    message_type: str = "text"
    prescription: dict[str, Any] | None = None
    created_at: datetime | None = None

    model_config = ConfigDict(from_attributes=True)
