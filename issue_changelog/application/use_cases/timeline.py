"""Status timelines built from ``status`` field changes."""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Iterable
from datetime import datetime

from issue_changelog.domain.entities import (
    Activity,
    ChangelogActivity,
    DateSelector,
    IssueStatusTimeline,
    StatusSpan,
)
from issue_changelog.utils import ensure_utc, now_utc, parse_timestamp

from .time_window import build_date_window

STATUS_FIELD = "status"


def format_duration(start: datetime, end: datetime | None) -> str | None:
    """Render the span between two moments as ``"3d 4h"`` or ``"5h"``."""

    if end is None:
        return None
    hours = int((end - start).total_seconds() // 3600)
    days = hours // 24
    if days > 0:
        return f"{days}d {hours % 24}h"
    return f"{hours}h"


def _issue_timeline(
    issue_key: str,
    changes: list[tuple[datetime, ChangelogActivity]],
    now: datetime,
) -> IssueStatusTimeline:
    changes.sort(key=lambda pair: pair[0])
    spans: list[StatusSpan] = []
    for index, (started, change) in enumerate(changes):
        ended = changes[index + 1][0] if index + 1 < len(changes) else None
        spans.append(
            StatusSpan(
                status=change.to_value,
                start_date=change.date,
                end_date=changes[index + 1][1].date if ended else None,
                duration_seconds=((ended or now) - started).total_seconds(),
                duration_text=format_duration(started, ended),
                author=change.author,
            )
        )
    return IssueStatusTimeline(
        issue_key=issue_key,
        status_changes=spans,
        total_duration_seconds=sum(span.duration_seconds for span in spans),
        last_update=changes[-1][1].date if changes else None,
    )


def build_status_timelines(
    activities: Iterable[Activity],
    selector: DateSelector | None = None,
    *,
    reference: datetime | None = None,
) -> list[IssueStatusTimeline]:
    """Group status changes per issue, most recently updated issue first.

    The last span of each issue is still open and measured up to ``reference``.
    """

    now = ensure_utc(reference) or now_utc()
    window = build_date_window(selector, now) if selector else None

    grouped: dict[str, list[tuple[datetime, ChangelogActivity]]] = defaultdict(list)
    for activity in activities:
        if not isinstance(activity, ChangelogActivity) or activity.field != STATUS_FIELD:
            continue
        moment = parse_timestamp(activity.date)
        if moment is None:
            continue
        if window is not None and not window.contains(moment):
            continue
        grouped[activity.issue_key].append((moment, activity))

    timelines = [_issue_timeline(key, changes, now) for key, changes in grouped.items()]
    timelines.sort(
        key=lambda timeline: parse_timestamp(timeline.last_update) or now, reverse=True
    )
    return timelines


__all__ = ["STATUS_FIELD", "build_status_timelines", "format_duration"]
