"""Helpers for working with timezone-aware datetimes."""

from __future__ import annotations

import calendar
import re
from datetime import date, datetime, time, timedelta, timezone, tzinfo
from functools import lru_cache
from typing import Any, Final

from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from issue_changelog.config import get_settings

_OFFSET_PATTERN: Final[re.Pattern[str]] = re.compile(
    r"^(?:UTC|GMT)(?P<sign>[+-])(?P<hours>\d{1,2})(?::?(?P<minutes>\d{2}))?$",
    re.IGNORECASE,
)
# Jira emits offsets without a colon ("+0000"), which older parsers reject.
_COMPACT_OFFSET: Final[re.Pattern[str]] = re.compile(r"([+-]\d{2})(\d{2})$")
_END_OF_DAY: Final[time] = time(23, 59, 59, 999000)


@lru_cache(maxsize=1)
def get_app_timezone() -> tzinfo:
    """Return the configured application timezone.

    The timezone is resolved using the ``APP_TIMEZONE`` environment variable.
    When it is unset or cannot be resolved, UTC is used.
    """

    settings = get_settings()
    tz_name = (settings.app_timezone or "").strip()
    if not tz_name:
        return timezone.utc
    return _resolve_timezone(tz_name)


def now_utc() -> datetime:
    """Return the current time as an aware UTC datetime."""

    return datetime.now(tz=timezone.utc)


def ensure_utc(value: datetime | None) -> datetime | None:
    """Normalize ``value`` to UTC, treating naive values as UTC already."""

    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def parse_timestamp(value: Any) -> datetime | None:
    """Parse an ISO-8601 value into an aware UTC datetime.

    Returns ``None`` for anything that cannot be interpreted as a timestamp
    instead of raising.
    """

    if isinstance(value, datetime):
        return ensure_utc(value)
    if not isinstance(value, str):
        return None
    text = value.strip()
    if not text:
        return None
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    else:
        text = _COMPACT_OFFSET.sub(r"\1:\2", text)
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        return None
    return ensure_utc(parsed)


def format_timestamp(value: datetime) -> str:
    """Render ``value`` as ``YYYY-MM-DDTHH:MM:SS.mmmZ`` in UTC."""

    if value.tzinfo is None:
        utc_value = value.replace(tzinfo=timezone.utc)
    else:
        utc_value = value.astimezone(timezone.utc)
    millis = utc_value.microsecond // 1000
    return utc_value.strftime("%Y-%m-%dT%H:%M:%S") + f".{millis:03d}Z"


def start_of_day(value: date | datetime) -> datetime:
    """Return 00:00:00.000 of ``value``'s day in the application timezone."""

    if isinstance(value, datetime):
        value = value.date()
    return datetime.combine(value, time.min, tzinfo=get_app_timezone())


def end_of_day(value: date | datetime) -> datetime:
    """Return 23:59:59.999 of ``value``'s day in the application timezone."""

    if isinstance(value, datetime):
        value = value.date()
    return datetime.combine(value, _END_OF_DAY, tzinfo=get_app_timezone())


def subtract_months(value: datetime, months: int) -> datetime:
    """Move ``value`` back by calendar months, clamping the day of month."""

    month_index = value.year * 12 + (value.month - 1) - months
    year, month = divmod(month_index, 12)
    month += 1
    day = min(value.day, calendar.monthrange(year, month)[1])
    return value.replace(year=year, month=month, day=day)


def _resolve_timezone(tz_name: str) -> tzinfo:
    """Resolve ``tz_name`` into a ``timezone`` instance."""

    try:
        return ZoneInfo(tz_name)
    except (ZoneInfoNotFoundError, ValueError):
        match = _OFFSET_PATTERN.match(tz_name)
        if match:
            sign = -1 if match.group("sign") == "-" else 1
            hours = int(match.group("hours"))
            minutes = int(match.group("minutes") or 0)
            offset = timedelta(hours=hours, minutes=minutes)
            return timezone(sign * offset)
    return timezone.utc
