"""Helpers for working with timezone-aware datetimes."""

from __future__ import annotations

import re
from datetime import date, datetime, time, timedelta, timezone, tzinfo
from functools import lru_cache
from typing import Final

from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from mindmend.config import get_settings

_DEFAULT_TIMEZONE: Final[str] = "UTC"
_OFFSET_PATTERN: Final[re.Pattern[str]] = re.compile(
    r"^(?:UTC|GMT)(?P<sign>[+-])(?P<hours>\d{1,2})(?::?(?P<minutes>\d{2}))?$",
    re.IGNORECASE,
)


@lru_cache(maxsize=1)
def get_app_timezone() -> tzinfo:
    """Return the configured application timezone.

    Booking dates and times are entered as wall-clock values in this timezone,
    so reminders are computed against it as well. Unknown names fall back to UTC.
    """

    settings = get_settings()
    tz_name = (settings.app_timezone or "").strip() or _DEFAULT_TIMEZONE
    return _resolve_timezone(tz_name)


def now_in_app_timezone() -> datetime:
    """Return the current time localized to the configured timezone."""

    return datetime.now(tz=get_app_timezone())


def now_utc_naive_datetime() -> datetime:
    """Return the current UTC time without ``tzinfo`` for DB defaults."""

    return datetime.now(tz=timezone.utc).replace(tzinfo=None)


def ensure_app_timezone(value: datetime | None) -> datetime | None:
    """Normalize an aware ``value`` so it is expressed in the configured timezone."""

    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=get_app_timezone())
    return value.astimezone(get_app_timezone())


def to_utc_naive_datetime(value: datetime | None) -> datetime | None:
    """Return ``value`` as naive UTC for storage.

    ``DATETIME`` columns drop the offset. Local wall clock time repeats when DST
    ends, so only UTC keeps stored values in chronological order. Naive input is
    read as app-local time.
    """

    localized = ensure_app_timezone(value)
    if localized is None:
        return None
    return localized.astimezone(timezone.utc).replace(tzinfo=None)


def from_utc_naive_datetime(value: datetime | None) -> datetime | None:
    """Return a stored naive UTC ``value`` expressed in the app timezone."""

    if value is None:
        return None
    return value.replace(tzinfo=timezone.utc).astimezone(get_app_timezone())


def combine_in_app_timezone(day: date, at: time) -> datetime:
    """Return the aware datetime for the wall-clock ``day`` and ``at``."""

    return datetime.combine(day, at.replace(tzinfo=None), tzinfo=get_app_timezone())


def _resolve_timezone(tz_name: str) -> tzinfo:
    """Resolve ``tz_name`` into a ``timezone`` instance."""

    try:
        return ZoneInfo(tz_name)
    except ZoneInfoNotFoundError:
        match = _OFFSET_PATTERN.match(tz_name)
        if match:
            sign = -1 if match.group("sign") == "-" else 1
            hours = int(match.group("hours"))
            minutes = int(match.group("minutes") or 0)
            offset = timedelta(hours=hours, minutes=minutes)
            return timezone(sign * offset)
    return timezone.utc
