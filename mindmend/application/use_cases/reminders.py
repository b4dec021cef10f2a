"""Periodic sweep that reminds participants of sessions starting soon."""

from __future__ import annotations

import asyncio
import logging
import math
from datetime import datetime, timedelta

import anyio
from sqlalchemy.orm import Session, sessionmaker

from mindmend.application.use_cases.notifications import notify_session_reminder
from mindmend.domain.entities import BOOKING_STATUS_CONFIRMED, Booking
from mindmend.infrastructure.repositories import BookingRepository
from mindmend.utils import combine_in_app_timezone, now_in_app_timezone

logger = logging.getLogger(__name__)


def sweep_session_reminders(
    session: Session,
    *,
    window: timedelta = timedelta(minutes=30),
    now: datetime | None = None,
) -> list[Booking]:
    """Send reminders for confirmed sessions starting within ``window``.

    Each booking is claimed with a conditional update before anything is sent,
    so overlapping sweeps remind a session only once. Returns the bookings
    reminded by this call.
    """

    current = now or now_in_app_timezone()
    repository = BookingRepository(session)
    reminded: list[Booking] = []

    for booking in repository.list_pending_reminders(
        status=BOOKING_STATUS_CONFIRMED, on=current.date()
    ):
        starts_at = combine_in_app_timezone(booking.scheduled_date, booking.scheduled_time)
        remaining = starts_at - current
        if remaining <= timedelta(0) or remaining > window:
            continue
        if not repository.claim_reminder(booking.id):
            continue

        # Nearest whole minute, halves rounding up.
        minutes_left = max(1, math.floor(remaining.total_seconds() / 60 + 0.5))
        notify_session_reminder(session, booking=booking, minutes_left=minutes_left)
        reminded.append(booking)

    if reminded:
        logger.info("Sent session reminders for %d booking(s)", len(reminded))
    return reminded


class ReminderScheduler:
    """Run :func:`sweep_session_reminders` on a fixed interval.

    The sweep itself is synchronous database work, so each run happens in a
    worker thread; notifications pushed from there reach the event loop
    through the publisher.
    """

    def __init__(
        self,
        session_factory: sessionmaker,
        *,
        interval_seconds: float,
        window: timedelta,
    ) -> None:
        self._session_factory = session_factory
        self._interval = interval_seconds
        self._window = window
        self._task: asyncio.Task | None = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def run_once(self) -> list[Booking]:
        with self._session_factory() as session:
            return sweep_session_reminders(session, window=self._window)

    async def _loop(self) -> None:
        while True:
            await asyncio.sleep(self._interval)
            try:
                await anyio.to_thread.run_sync(self.run_once)
            except Exception:
                logger.exception("Session reminder sweep failed")

    def start(self) -> None:
        if self.running or self._interval <= 0:
            return
        self._task = asyncio.get_running_loop().create_task(self._loop())

    async def stop(self) -> None:
        if self._task is None:
            return
        self._task.cancel()
        try:
            await self._task
        except asyncio.CancelledError:
            pass
        self._task = None


__all__ = ["ReminderScheduler", "sweep_session_reminders"]
