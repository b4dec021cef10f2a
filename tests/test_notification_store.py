"""Tests for listing and acknowledging stored notifications."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from mindmend.application.use_cases.notifications import (
    NotificationNotFoundError,
    list_notifications,
    mark_all_notifications_read,
    mark_notification_read,
)
from mindmend.domain.entities import Notification, NotificationType
from mindmend.infrastructure.repositories import NotificationRepository
from mindmend.utils import now_in_app_timezone


def _store(session, recipient_id: int, *, title: str = "Hi", created_at=None) -> Notification:
    return NotificationRepository(session).create(
        Notification(
            id=None,
            recipient_id=recipient_id,
            type=NotificationType.SYSTEM,
            title=title,
            message="message",
            created_at=created_at,
        )
    )


def test_mark_read_is_idempotent(session, patient) -> None:
    stored = _store(session, patient.id)

    first = mark_notification_read(session, notification_id=stored.id, recipient_id=patient.id)
    second = mark_notification_read(session, notification_id=stored.id, recipient_id=patient.id)

    assert first.read is True
    assert second.read is True
    assert NotificationRepository(session).get(stored.id).read is True


def test_mark_read_rejects_other_recipients(session, patient, therapist) -> None:
    stored = _store(session, patient.id)

    with pytest.raises(NotificationNotFoundError):
        mark_notification_read(session, notification_id=stored.id, recipient_id=therapist.id)
    with pytest.raises(NotificationNotFoundError):
        mark_notification_read(session, notification_id=12345, recipient_id=patient.id)

    assert NotificationRepository(session).get(stored.id).read is False


def test_mark_all_read_is_scoped_to_the_recipient(session, patient, therapist) -> None:
    for _ in range(3):
        _store(session, patient.id)
    _store(session, therapist.id)

    updated = mark_all_notifications_read(session, recipient_id=patient.id)

    repository = NotificationRepository(session)
    assert updated == 3
    assert repository.count_unread(patient.id) == 0
    assert repository.count_unread(therapist.id) == 1
    assert mark_all_notifications_read(session, recipient_id=patient.id) == 0


def test_list_is_capped_and_newest_first(session, patient) -> None:
    start = now_in_app_timezone() - timedelta(hours=2)
    for index in range(55):
        _store(session, patient.id, title=f"n{index}", created_at=start + timedelta(minutes=index))

    listed = list_notifications(session, recipient_id=patient.id)

    assert len(listed) == 50
    assert listed[0].title == "n54"
    timestamps = [item.created_at for item in listed]
    assert timestamps == sorted(timestamps, reverse=True)
    assert len(set(timestamps)) == len(timestamps)


def test_list_order_survives_the_dst_fold(session, patient, app_timezone) -> None:
    app_timezone("America/New_York")
    # 01:50 EDT, then 01:10 EST once the clocks fall back.
    first_at = datetime(2024, 11, 3, 5, 50, tzinfo=timezone.utc)
    later_at = datetime(2024, 11, 3, 6, 10, tzinfo=timezone.utc)
    _store(session, patient.id, title="first", created_at=first_at)
    _store(session, patient.id, title="later", created_at=later_at)

    listed = NotificationRepository(session).list_for_user(patient.id)

    assert [item.title for item in listed] == ["later", "first"]
    assert listed[0].created_at == later_at
    assert listed[0].created_at.utcoffset() == timedelta(hours=-5)
    assert listed[1].created_at.utcoffset() == timedelta(hours=-4)
