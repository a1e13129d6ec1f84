"""Relative and custom time windows applied to activity timestamps.

Every relative selector uses cutoff semantics: an activity matches when
``timestamp >= reference - N``, i.e. its age is at most ``N``. A larger
window therefore always contains a smaller one. Custom ranges are
inclusive whole days in the application timezone.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Any

from issue_changelog.domain.entities import (
    DATE_FILTER_CUSTOM,
    Activity,
    DateSelector,
    FilterOption,
)
from issue_changelog.utils import (
    end_of_day,
    ensure_utc,
    now_utc,
    parse_timestamp,
    start_of_day,
    subtract_months,
)

RELATIVE_WINDOWS: dict[str, timedelta] = {
    "just_now": timedelta(seconds=60),
    "5_minutes": timedelta(seconds=300),
    "2_hours": timedelta(hours=2),
    "3_days": timedelta(days=3),
    "1_week": timedelta(weeks=1),
    "1_month": timedelta(days=30),
    "24h": timedelta(hours=24),
    "7d": timedelta(days=7),
    "30d": timedelta(days=30),
}
CALENDAR_WINDOWS: dict[str, int] = {
    "6m": 6,
    "1y": 12,
}

DATE_FILTER_OPTIONS: list[FilterOption] = [
    FilterOption(label="Just now", value="just_now"),
    FilterOption(label="5 minutes ago", value="5_minutes"),
    FilterOption(label="2 hours ago", value="2_hours"),
    FilterOption(label="3 days ago", value="3_days"),
    FilterOption(label="1 week ago", value="1_week"),
    FilterOption(label="1 month ago", value="1_month"),
    FilterOption(label="Custom", value=DATE_FILTER_CUSTOM),
]


@dataclass(frozen=True)
class DateWindow:
    """Inclusive ``[start, end]`` bounds; a missing bound is open."""

    start: datetime | None = None
    end: datetime | None = None

    def contains(self, moment: datetime) -> bool:
        if self.start is not None and moment < self.start:
            return False
        if self.end is not None and moment > self.end:
            return False
        return True


def resolve_cutoff(value: str, reference: datetime | None = None) -> datetime | None:
    """Return the lower bound for a relative selector, ``None`` for anything else."""

    now = ensure_utc(reference) or now_utc()
    if value in RELATIVE_WINDOWS:
        return now - RELATIVE_WINDOWS[value]
    if value in CALENDAR_WINDOWS:
        return subtract_months(now, CALENDAR_WINDOWS[value])
    return None


def parse_day(value: Any) -> date | None:
    """Interpret ``value`` as a calendar day (``date``, datetime or ISO string)."""

    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        try:
            return date.fromisoformat(value.strip()[:10])
        except ValueError:
            parsed = parse_timestamp(value)
            return parsed.date() if parsed else None
    return None


def build_date_window(
    selector: DateSelector, reference: datetime | None = None
) -> DateWindow | None:
    """Translate ``selector`` into bounds, or ``None`` when nothing is excluded."""

    if selector.is_custom:
        if selector.date_from is None and selector.date_to is None:
            return None
        return DateWindow(
            start=start_of_day(selector.date_from) if selector.date_from else None,
            end=end_of_day(selector.date_to) if selector.date_to else None,
        )

    cutoff = resolve_cutoff(selector.value, reference)
    if cutoff is None:
        return None
    return DateWindow(start=cutoff)


def matches_time_window(
    activity: Activity, selector: DateSelector, reference: datetime | None = None
) -> bool:
    """Return ``True`` when ``activity`` falls inside ``selector``'s window.

    Activities whose timestamp cannot be parsed never match a bounded
    window.
    """

    if selector.is_unbounded:
        return True
    return in_window(activity, build_date_window(selector, reference))


def in_window(activity: Activity, window: DateWindow | None) -> bool:
    """Return ``True`` when ``activity`` lies inside an already resolved ``window``."""

    if window is None:
        return True
    moment = parse_timestamp(activity.timestamp)
    if moment is None:
        return False
    return window.contains(moment)


__all__ = [
    "CALENDAR_WINDOWS",
    "DATE_FILTER_OPTIONS",
    "DateWindow",
    "RELATIVE_WINDOWS",
    "build_date_window",
    "in_window",
    "matches_time_window",
    "parse_day",
    "resolve_cutoff",
]
