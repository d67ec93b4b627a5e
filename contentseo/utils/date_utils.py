"""
Date parsing and formatting utilities.
"""

from datetime import datetime, timezone
from typing import Optional, Union

from dateutil import parser as dateparser
from dateutil.relativedelta import relativedelta


def parse_date(value: Union[str, int, float, None]) -> Optional[datetime]:
    """
    Parse a metadata date into a timezone-aware UTC datetime.

    Handles:
    - "2024-09-13"
    - "2024-09-13T14:00:00"
    - "2024-09-13T14:00:00Z"
    - "2024-09-13T14:00:00+09:00"
    - epoch milliseconds (1726236000000)

    Naive values are taken as UTC. Returns None for missing or unparseable input.
    """
    if value is None or isinstance(value, bool):
        return None

    if isinstance(value, (int, float)):
        try:
            return datetime.fromtimestamp(value / 1000, tz=timezone.utc)
        except (OverflowError, OSError, ValueError):
            return None

    if not isinstance(value, str) or not value.strip():
        return None

    try:
        dt = dateparser.isoparse(value.strip())
    except (ValueError, OverflowError):
        try:
            dt = dateparser.parse(value)
        except (ValueError, OverflowError):
            return None

    return to_utc(dt)


def to_utc(dt: datetime) -> datetime:
    """Attach UTC to naive datetimes, convert aware ones."""
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def format_date(dt: datetime) -> str:
    """Calendar date in UTC, e.g. "2026-01-24"."""
    return to_utc(dt).strftime("%Y-%m-%d")


def days_since(dt: datetime, now: Optional[datetime] = None) -> float:
    """Fractional days elapsed between dt and now."""
    now = to_utc(now) if now else utc_now()
    return (now - to_utc(dt)).total_seconds() / 86400


def months_ago(months: int, now: Optional[datetime] = None) -> datetime:
    """The same wall-clock instant `months` calendar months before now."""
    now = to_utc(now) if now else utc_now()
    return now - relativedelta(months=months)
