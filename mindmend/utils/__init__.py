"""Utility helpers for reusable functionality."""

from .datetime import (
    combine_in_app_timezone,
    ensure_app_timezone,
    from_utc_naive_datetime,
    get_app_timezone,
    now_in_app_timezone,
    now_utc_naive_datetime,
    to_utc_naive_datetime,
)

__all__ = [
    "combine_in_app_timezone",
    "ensure_app_timezone",
    "from_utc_naive_datetime",
    "get_app_timezone",
    "now_in_app_timezone",
    "now_utc_naive_datetime",
    "to_utc_naive_datetime",
]
