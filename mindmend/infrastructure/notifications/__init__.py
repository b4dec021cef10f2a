"""Realtime notification helpers for the infrastructure layer."""

from .manager import ConnectionRegistry, PushConnection, connection_registry
from .publisher import (
    NOTIFICATION_EVENT,
    NotificationPublisher,
    PushOutcome,
    deliver,
    notification_publisher,
)
from .realtime import (
    RealtimeEventPublisher,
    dispatch_realtime_event,
    realtime_event_publisher,
)

__all__ = [
    "ConnectionRegistry",
    "PushConnection",
    "connection_registry",
    "NOTIFICATION_EVENT",
    "NotificationPublisher",
    "PushOutcome",
    "deliver",
    "notification_publisher",
    "RealtimeEventPublisher",
    "realtime_event_publisher",
    "dispatch_realtime_event",
]
