"""Domain entity representing a user."""

from dataclasses import dataclass
from datetime import datetime

ROLE_PATIENT = "patient"
ROLE_THERAPIST = "therapist"
USER_ROLES = (ROLE_PATIENT, ROLE_THERAPIST)


@dataclass
class User:
    """Core attributes describing an application user."""

    id: int | None
    name: str
    email: str
    password: str
    role: str
    created_at: datetime | None

    def is_therapist(self) -> bool:
        """Return ``True`` when the user offers therapy sessions."""

        return self.role == ROLE_THERAPIST


__all__ = ["User", "ROLE_PATIENT", "ROLE_THERAPIST", "USER_ROLES"]
