"""Tests for persisting and pushing notifications."""

from __future__ import annotations

import pytest
from sqlalchemy.exc import OperationalError

from mindmend.application.use_cases.notifications import (
    NotificationValidationError,
    dispatch_notification,
    list_notifications,
)
from mindmend.domain.entities import NotificationType
from mindmend.infrastructure.models import NotificationModel
from mindmend.infrastructure.notifications import (
    NOTIFICATION_EVENT,
    ConnectionRegistry,
    NotificationPublisher,
)
from mindmend.infrastructure.repositories import NotificationRepository

from tests.test_connection_registry import FakeConnection


def _publisher_with(*connections_by_user) -> tuple[NotificationPublisher, ConnectionRegistry]:
    registry = ConnectionRegistry()
    for user_id, connection in connections_by_user:
        registry.join(user_id, connection)
    return NotificationPublisher(registry), registry


def test_dispatch_persists_one_unread_record(session, patient) -> None:
    publisher, _ = _publisher_with()

    result = dispatch_notification(
        session,
        recipient_id=patient.id,
        title="Booking Confirmed!",
        message="Your session is confirmed",
        type="booking_confirmed",
        publisher=publisher,
    )

    assert result.persisted
    assert result.error is None
    assert result.notification.read is False
    assert result.notification.created_at is not None
    assert result.notification.type is NotificationType.BOOKING_CONFIRMED
    assert session.query(NotificationModel).count() == 1


def test_offline_recipient_gets_record_but_no_push(session, patient) -> None:
    publisher, _ = _publisher_with()

    result = dispatch_notification(
        session,
        recipient_id=patient.id,
        title="Booking Confirmed!",
        message="Your session is confirmed",
        type=NotificationType.BOOKING_CONFIRMED,
        publisher=publisher,
    )

    assert result.persisted
    assert result.push.delivered == 0
    assert result.pushed is False
    listed = list_notifications(session, recipient_id=patient.id)
    assert [item.id for item in listed] == [result.notification.id]
    assert listed[0].read is False


def test_online_recipient_receives_identical_payload(session, patient, therapist) -> None:
    mine, someone_else = FakeConnection(), FakeConnection()
    publisher, _ = _publisher_with((patient.id, mine), (therapist.id, someone_else))

    result = dispatch_notification(
        session,
        recipient_id=patient.id,
        title="Booking Confirmed!",
        message="Your session is confirmed",
        type="booking_confirmed",
        link="/patient/book",
        data={"booking_id": 7},
        publisher=publisher,
    )

    assert result.pushed
    assert result.push.delivered == 1
    assert someone_else.received == []
    assert len(mine.received) == 1
    event = mine.received[0]
    assert event["type"] == NOTIFICATION_EVENT
    assert event["data"]["id"] == result.notification.id
    assert event["data"]["title"] == "Booking Confirmed!"
    assert event["data"]["type"] == "booking_confirmed"
    assert event["data"]["read"] is False
    assert event["data"]["link"] == "/patient/book"
    assert event["data"]["data"] == {"booking_id": 7}


def test_back_to_back_dispatches_list_newest_first(session, patient) -> None:
    publisher, _ = _publisher_with()

    first = dispatch_notification(
        session, recipient_id=patient.id, title="First", message="one",
        type="system", publisher=publisher,
    )
    second = dispatch_notification(
        session, recipient_id=patient.id, title="Second", message="two",
        type="system", publisher=publisher,
    )

    listed = list_notifications(session, recipient_id=patient.id)
    assert [item.id for item in listed] == [second.notification.id, first.notification.id]
    assert all(item.read is False for item in listed)


@pytest.mark.parametrize(
    "overrides",
    [
        {"type": "mood_logged"},
        {"recipient_id": 0},
        {"recipient_id": 999},
        {"title": "  "},
    ],
)
def test_invalid_requests_are_rejected_without_a_record(session, patient, overrides) -> None:
    request = {
        "recipient_id": patient.id,
        "title": "Hello",
        "message": "World",
        "type": "system",
        **overrides,
    }

    with pytest.raises(NotificationValidationError):
        dispatch_notification(session, publisher=_publisher_with()[0], **request)

    assert session.query(NotificationModel).count() == 0


def test_storage_failure_is_reported_and_nothing_is_pushed(
    session, patient, monkeypatch: pytest.MonkeyPatch
) -> None:
    connection = FakeConnection()
    publisher, _ = _publisher_with((patient.id, connection))

    def _fail(self, notification):
        raise OperationalError("INSERT", {}, Exception("database is locked"))

    monkeypatch.setattr(NotificationRepository, "create", _fail)

    result = dispatch_notification(
        session, recipient_id=patient.id, title="Hi", message="there",
        type="system", publisher=publisher,
    )

    assert result.persisted is False
    assert isinstance(result.error, OperationalError)
    assert connection.received == []


def test_push_failure_keeps_the_record(session, patient) -> None:
    broken = FakeConnection(fail=True)
    publisher, registry = _publisher_with((patient.id, broken))

    result = dispatch_notification(
        session, recipient_id=patient.id, title="Hi", message="there",
        type="new_message", publisher=publisher,
    )

    assert result.persisted
    assert result.push.delivered == 0
    assert registry.connections_for(patient.id) == []
    stored = NotificationRepository(session).get(result.notification.id)
    assert stored is not None and stored.read is False
