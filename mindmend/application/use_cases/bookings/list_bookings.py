"""Use case for listing the bookings a user takes part in."""

from collections.abc import Sequence

from sqlalchemy.orm import Session

from mindmend.domain.entities import Booking, User
from mindmend.infrastructure.repositories import BookingRepository


def list_bookings(session: Session, *, user: User) -> Sequence[Booking]:
    return BookingRepository(session).list_for_participant(user.id)
