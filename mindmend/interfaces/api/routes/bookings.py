"""Endpoints to request and manage therapy sessions."""

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from mindmend.application.use_cases.bookings import (
    BookingNotFoundError,
    BookingPermissionError,
    create_booking,
    list_bookings,
    update_booking_status,
)
from mindmend.domain.entities import Booking, User
from mindmend.infrastructure.database import get_db
from mindmend.interfaces.api.dependencies import get_current_user
from mindmend.interfaces.api.schemas import BookingCreate, BookingRead, BookingStatusUpdate

router = APIRouter(prefix="/bookings", tags=["bookings"])


def _booking_to_schema(booking: Booking) -> BookingRead:
    return BookingRead.model_validate(booking)


@router.post("/", response_model=BookingRead, status_code=status.HTTP_201_CREATED)
def request_booking(
    payload: BookingCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> BookingRead:
    """Request a session with a therapist; the therapist is notified."""

    try:
        booking = create_booking(
            db,
            patient=current_user,
            therapist_id=payload.therapist_id,
            scheduled_date=payload.scheduled_date,
            scheduled_time=payload.scheduled_time,
            notes=payload.notes,
        )
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    return _booking_to_schema(booking)


@router.get("/", response_model=list[BookingRead])
def get_bookings(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> list[BookingRead]:
    return [_booking_to_schema(booking) for booking in list_bookings(db, user=current_user)]


@router.put("/{booking_id}/status", response_model=BookingRead)
def change_booking_status(
    booking_id: int,
    payload: BookingStatusUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> BookingRead:
    """Accept, reject, cancel or complete a booking; the patient is notified."""

    try:
        booking = update_booking_status(
            db,
            booking_id=booking_id,
            actor=current_user,
            status=payload.status,
            notes=payload.notes,
        )
    except BookingNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    except BookingPermissionError as exc:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(exc)) from exc
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    return _booking_to_schema(booking)
