"""Use cases for direct chat messages between users."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import asdict
from typing import Any

from sqlalchemy.orm import Session

from mindmend.application.use_cases.notifications import (
    notify_new_message,
    notify_prescription_sent,
)
from mindmend.domain.entities import MESSAGE_TYPE_PRESCRIPTION, ChatMessage, User
from mindmend.infrastructure.notifications import dispatch_realtime_event
from mindmend.infrastructure.repositories import ChatMessageRepository, UserRepository
from mindmend.utils import now_in_app_timezone

NEW_MESSAGE_EVENT = "new_message"


class MessagePermissionError(ValueError):
    """Raised when a user sends a kind of message their role does not allow."""


def serialize_chat_message(message: ChatMessage) -> dict[str, object]:
    payload = asdict(message)
    payload["created_at"] = message.created_at.isoformat() if message.created_at else None
    return payload


def _ensure_recipient(session: Session, sender: User, recipient_id: int) -> User:
    if recipient_id == sender.id:
        raise ValueError("Cannot send a message to yourself")
    recipient = UserRepository(session).get(recipient_id)
    if recipient is None:
        raise ValueError("Recipient not found")
    return recipient


def _store_and_push(session: Session, message: ChatMessage) -> ChatMessage:
    saved = ChatMessageRepository(session).create(message)
    dispatch_realtime_event(
        [saved.recipient_id],
        event_type=NEW_MESSAGE_EVENT,
        payload=serialize_chat_message(saved),
    )
    return saved


def send_message(
    session: Session, *, sender: User, recipient_id: int, content: str
) -> ChatMessage:
    """Store a message, push it to the recipient and leave them a notification."""

    text = (content or "").strip()
    if not text:
        raise ValueError("Message content is required")
    _ensure_recipient(session, sender, recipient_id)

    saved = _store_and_push(
        session,
        ChatMessage(id=None, sender_id=sender.id, recipient_id=recipient_id, content=text),
    )
    notify_new_message(session, chat_message=saved, sender=sender)
    return saved


def send_prescription(
    session: Session,
    *,
    therapist: User,
    recipient_id: int,
    prescription: Mapping[str, Any],
) -> ChatMessage:
    """Send a prescription from a therapist to one of their patients.

    The prescription travels as a chat message of type ``prescription``; the
    patient gets the usual ``new_message`` event plus a notification.
    """

    if not therapist.is_therapist():
        raise MessagePermissionError("Only therapists can send prescriptions")
    recipient = _ensure_recipient(session, therapist, recipient_id)
    if recipient.is_therapist():
        raise ValueError("Prescriptions can only be sent to patients")

    details = dict(prescription)
    details["prescribed_at"] = now_in_app_timezone().isoformat()
    saved = _store_and_push(
        session,
        ChatMessage(
            id=None,
            sender_id=therapist.id,
            recipient_id=recipient_id,
            content="Prescription",
            message_type=MESSAGE_TYPE_PRESCRIPTION,
            prescription=details,
        ),
    )
    notify_prescription_sent(session, chat_message=saved, therapist=therapist)
    return saved


def list_conversation(
    session: Session, *, user: User, other_user_id: int
) -> Sequence[ChatMessage]:
    return ChatMessageRepository(session).list_conversation(user.id, other_user_id)


__all__ = [
    "MessagePermissionError",
    "NEW_MESSAGE_EVENT",
    "list_conversation",
    "send_message",
    "send_prescription",
    "serialize_chat_message",
]
