# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""DateTime utilities.

All timestamps are stored in UTC (PostgreSQL TIMESTAMPTZ) and all Python
datetimes are timezone-aware. Expiry checks on academic years compare
calendar dates only.

Usage:
    from src.utils.datetime import utc_now, utc_today

    created_at = utc_now()
    expired = is_date_passed(academic_year.expiry_date)
"""

from datetime import date, datetime, timedelta, timezone


def utc_now() -> datetime:
    """Get current UTC time as timezone-aware datetime.

    Returns:
        Timezone-aware datetime representing current UTC time.
    """
    return datetime.now(timezone.utc)


def utc_today() -> date:
    """Get today's date in UTC."""
    return utc_now().date()


def seconds_from_now(seconds: int) -> datetime:
    """Get a UTC datetime the given number of seconds in the future."""
    return utc_now() + timedelta(seconds=seconds)


def timestamp_ms(dt: datetime | None = None) -> int:
    """Milliseconds since the epoch, used to prefix uploaded file names.

    Args:
        dt: Datetime to convert. Defaults to now.

    Returns:
        Integer milliseconds since 1970-01-01 UTC.
    """
    dt = dt or utc_now()
    return int(dt.timestamp() * 1000)


def is_date_passed(expiry: date | datetime | None, today: date | None = None) -> bool:
    """Check whether a calendar date lies strictly in the past.

    Only the date part is compared, so a date equal to today has not
    passed yet. A missing date never passes.

    Args:
        expiry: Date (or datetime) to check.
        today: Reference date. Defaults to today in UTC.

    Returns:
        True if today is after the expiry date.
    """
    if expiry is None:
        return False
    if isinstance(expiry, datetime):
        expiry = expiry.date()
    return (today or utc_today()) > expiry
