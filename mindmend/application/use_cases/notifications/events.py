"""Utility helpers to generate and dispatch domain notifications.

Every helper swallows notification problems after logging them: a booking or a
chat message must never fail because its notification could not be created.
"""

from __future__ import annotations

import logging
from typing import Any

from sqlalchemy.orm import Session

from mindmend.domain.entities import (
    BOOKING_STATUS_CONFIRMED,
    BOOKING_STATUS_REJECTED,
    Booking,
    ChatMessage,
    NotificationType,
    User,
)

from .dispatcher import DispatchResult, NotificationValidationError, dispatch_notification

logger = logging.getLogger(__name__)

PATIENT_BOOKINGS_LINK = "/patient/book"
PATIENT_HOME_LINK = "/patient"
PATIENT_CHAT_LINK = "/patient/chat"
THERAPIST_APPOINTMENTS_LINK = "/therapist/appointments"
THERAPIST_CHAT_LINK = "/therapist/chat"

_MESSAGE_PREVIEW_LENGTH = 50


def _notify(session: Session, **fields: Any) -> DispatchResult | None:
    try:
        return dispatch_notification(session, **fields)
    except NotificationValidationError:
        logger.exception("Rejected notification for user %s", fields.get("recipient_id"))
        return None


def _format_slot(booking: Booking) -> tuple[str, str]:
    return (
        booking.scheduled_date.isoformat(),
        booking.scheduled_time.strftime("%H:%M"),
    )


def notify_booking_requested(
    session: Session, *, booking: Booking, patient: User
) -> DispatchResult | None:
    """Tell the therapist that ``patient`` asked for a session."""

    day, at = _format_slot(booking)
    return _notify(
        session,
        recipient_id=booking.therapist_id,
        title="New Booking Request",
        message=f"{patient.name} has requested a session on {day} at {at}",
        type=NotificationType.BOOKING_REQUEST,
        link=THERAPIST_APPOINTMENTS_LINK,
        data={"booking_id": booking.id},
    )


def notify_booking_status_changed(
    session: Session, *, booking: Booking, therapist: User
) -> DispatchResult | None:
    """Tell the patient how their booking changed."""

    day, at = _format_slot(booking)
    notification_type = NotificationType.SYSTEM
    if booking.status == BOOKING_STATUS_CONFIRMED:
        notification_type = NotificationType.BOOKING_CONFIRMED
        title = "Booking Confirmed!"
        message = f"Dr. {therapist.name} has confirmed your session for {day} at {at}"
    elif booking.status == BOOKING_STATUS_REJECTED:
        title = "Booking Declined"
        message = f"Dr. {therapist.name} is unavailable for the requested slot."
    else:
        title = "Booking Update"
        message = f"Your session status has been updated to {booking.status}"

    return _notify(
        session,
        recipient_id=booking.patient_id,
        title=title,
        message=message,
        type=notification_type,
        link=PATIENT_BOOKINGS_LINK,
        data={"booking_id": booking.id, "status": booking.status},
    )


def notify_new_message(
    session: Session, *, chat_message: ChatMessage, sender: User
) -> DispatchResult | None:
    """Tell the recipient of ``chat_message`` that a message arrived."""

    preview = chat_message.content[:_MESSAGE_PREVIEW_LENGTH]
    if len(chat_message.content) > _MESSAGE_PREVIEW_LENGTH:
        preview += "..."
    return _notify(
        session,
        recipient_id=chat_message.recipient_id,
        title=f"New Message from {sender.name}",
        message=preview,
        type=NotificationType.NEW_MESSAGE,
        link=PATIENT_CHAT_LINK if sender.is_therapist() else THERAPIST_CHAT_LINK,
        data={"message_id": chat_message.id, "sender_id": sender.id},
    )


def notify_prescription_sent(
    session: Session, *, chat_message: ChatMessage, therapist: User
) -> DispatchResult | None:
    return _notify(
        session,
        recipient_id=chat_message.recipient_id,
        title="New Prescription",
        message=f"Dr. {therapist.name} has sent you a new prescription.",
        type=NotificationType.NEW_MESSAGE,
        link=PATIENT_CHAT_LINK,
        data={"message_id": chat_message.id, "sender_id": therapist.id},
    )


def notify_session_reminder(
    session: Session, *, booking: Booking, minutes_left: int
) -> list[DispatchResult]:
    """Remind both participants that ``booking`` starts soon."""

    results = [
        _notify(
            session,
            recipient_id=booking.patient_id,
            title="Session Reminder",
            message=f"Your therapy session starts in {minutes_left} minutes!",
            type=NotificationType.SESSION_REMINDER,
            link=PATIENT_HOME_LINK,
            data={"booking_id": booking.id},
        ),
        _notify(
            session,
            recipient_id=booking.therapist_id,
            title="Upcoming Session",
            message=f"You have a session starting in {minutes_left} minutes.",
            type=NotificationType.SESSION_REMINDER,
            link=THERAPIST_APPOINTMENTS_LINK,
            data={"booking_id": booking.id},
        ),
    ]
    return [result for result in results if result is not None]


__all__ = [
    "notify_booking_requested",
    "notify_booking_status_changed",
    "notify_new_message",
    "notify_prescription_sent",
    "notify_session_reminder",
]
