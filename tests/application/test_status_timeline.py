"""Tests for status timelines."""

from __future__ import annotations

from datetime import date, datetime, timedelta, timezone

from issue_changelog.application.use_cases.timeline import (
    build_status_timelines,
    format_duration,
)
from issue_changelog.domain.entities import (
    ChangelogActivity,
    CommentActivity,
    DateSelector,
)

NOW = datetime(2024, 1, 10, tzinfo=timezone.utc)


def _status(issue: str, old: str, new: str, when: str) -> ChangelogActivity:
    return ChangelogActivity(issue, "Ana", "status", old, new, when)


ACTIVITIES = [
    _status("KC-1", "In Progress", "Done", "2024-01-09T00:00:00.000Z"),
    _status("KC-1", "To Do", "In Progress", "2024-01-01T00:00:00.000Z"),
    _status("KC-2", "Open", "Review", "2024-01-04T00:00:00.000Z"),
    ChangelogActivity("KC-1", "Ana", "assignee", "-", "Bob", "2024-01-05T00:00:00.000Z"),
    CommentActivity("KC-2", "Bob", "status?", "c1", "2024-01-08T00:00:00.000Z"),
]


def test_format_duration() -> None:
    start = datetime(2024, 1, 1, tzinfo=timezone.utc)

    assert format_duration(start, start + timedelta(hours=5, minutes=30)) == "5h"
    assert format_duration(start, start + timedelta(hours=27)) == "1d 3h"
    assert format_duration(start, None) is None


def test_spans_are_ordered_and_the_last_one_stays_open() -> None:
    timelines = build_status_timelines(ACTIVITIES, reference=NOW)

    assert [timeline.issue_key for timeline in timelines] == ["KC-1", "KC-2"]
    in_progress, done = timelines[0].status_changes
    assert in_progress.status == "In Progress"
    assert in_progress.end_date == "2024-01-09T00:00:00.000Z"
    assert in_progress.duration_text == "8d 0h"
    assert done.end_date is None
    assert done.duration_text is None
    assert done.duration_seconds == timedelta(days=1).total_seconds()
    assert timelines[0].total_duration_seconds == timedelta(days=9).total_seconds()
    assert timelines[0].last_update == "2024-01-09T00:00:00.000Z"


def test_window_limits_the_status_changes() -> None:
    selector = DateSelector(value="custom", date_from=date(2024, 1, 2), date_to=date(2024, 1, 8))

    timelines = build_status_timelines(ACTIVITIES, selector, reference=NOW)

    assert [timeline.issue_key for timeline in timelines] == ["KC-2"]
