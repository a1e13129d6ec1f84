"""Column filters, ordering and pagination over an activity snapshot.

Everything here is a pure function of an already fetched snapshot; filter
or page changes never trigger a new upstream fetch.
"""

from __future__ import annotations

import math
from collections.abc import Callable, Iterable, Sequence
from datetime import datetime, timezone

from issue_changelog.domain.entities import (
    ACTIVITY_TYPE_COMMENT,
    Activity,
    AttachmentActivity,
    ChangelogActivity,
    CommentActivity,
    FilterOption,
    FilterOptions,
    FilterState,
    Page,
)
from issue_changelog.utils import ensure_utc, now_utc, parse_timestamp

from .time_window import DATE_FILTER_OPTIONS, build_date_window, in_window

COMMENT_FIELD_LABEL = "Comment"

_OLDEST = datetime.min.replace(tzinfo=timezone.utc)


def _contains(haystack: str | None, needle: str) -> bool:
    return needle.lower() in (haystack or "").lower()


def field_label(activity: Activity) -> str:
    """Value shown in the Field/Content column."""

    if isinstance(activity, ChangelogActivity):
        return activity.field
    if isinstance(activity, AttachmentActivity):
        return activity.filename
    return COMMENT_FIELD_LABEL


def to_label(activity: Activity) -> str:
    """Value shown in the To column."""

    if isinstance(activity, ChangelogActivity):
        return activity.to_value
    if isinstance(activity, AttachmentActivity):
        return activity.size_label
    return activity.content


def matches_author(activity: Activity, authors: Sequence[str]) -> bool:
    if not authors:
        return True
    return any(_contains(activity.author, author) for author in authors)


def matches_field(activity: Activity, fields: Sequence[str]) -> bool:
    """Multi-select Field/Content predicate.

    Comments match against the ``"comment"`` label, never against their text.
    """

    if not fields:
        return True
    for value in fields:
        if isinstance(activity, ChangelogActivity) and _contains(activity.field, value):
            return True
        if isinstance(activity, CommentActivity) and _contains(ACTIVITY_TYPE_COMMENT, value):
            return True
        if isinstance(activity, AttachmentActivity) and _contains(activity.filename, value):
            return True
    return False


def matches_from(activity: Activity, text: str) -> bool:
    if not text:
        return True
    if isinstance(activity, ChangelogActivity):
        return _contains(activity.from_value, text)
    return False


def matches_to(activity: Activity, text: str) -> bool:
    if not text:
        return True
    return _contains(to_label(activity), text)


def build_predicate(
    filters: FilterState, reference: datetime | None = None
) -> Callable[[Activity], bool]:
    """Combine every active filter dimension with AND.

    The date window is resolved once, so every activity is compared against
    the same cutoff.
    """

    window = build_date_window(filters.date, ensure_utc(reference) or now_utc())

    def predicate(activity: Activity) -> bool:
        return (
            matches_author(activity, filters.authors)
            and matches_field(activity, filters.fields)
            and matches_from(activity, filters.from_text)
            and matches_to(activity, filters.to_text)
            and in_window(activity, window)
        )

    return predicate


def sort_by_timestamp_desc(activities: Iterable[Activity]) -> list[Activity]:
    """Most recent first; ties keep their snapshot order."""

    def sort_key(activity: Activity) -> datetime:
        return parse_timestamp(activity.timestamp) or _OLDEST

    return sorted(activities, key=sort_key, reverse=True)


def paginate(items: Sequence[Activity], page: int, page_size: int) -> Page[Activity]:
    """Slice ``items`` into the requested page.

    ``total_pages`` is never 0 so an empty result still renders one page.
    """

    page = max(page, 1)
    page_size = max(page_size, 1)
    total_count = len(items)
    total_pages = math.ceil(total_count / page_size) if total_count else 1
    start = (page - 1) * page_size
    return Page(
        items=list(items[start : start + page_size]),
        total_count=total_count,
        total_pages=total_pages,
        page=page,
        page_size=page_size,
    )


def apply_query(
    activities: Iterable[Activity],
    filters: FilterState,
    *,
    reference: datetime | None = None,
) -> Page[Activity]:
    """Filter, sort by timestamp descending and paginate ``activities``."""

    predicate = build_predicate(filters, reference)
    matching = [activity for activity in activities if predicate(activity)]
    return paginate(sort_by_timestamp_desc(matching), filters.page, filters.page_size)


def build_filter_options(activities: Iterable[Activity]) -> FilterOptions:
    """Return the distinct authors and field labels present in ``activities``."""

    authors: set[str] = set()
    fields: set[str] = set()
    for activity in activities:
        if activity.author:
            authors.add(activity.author)
        label = field_label(activity)
        if label:
            fields.add(label)

    return FilterOptions(
        authors=[FilterOption(label=name, value=name) for name in sorted(authors)],
        fields=[FilterOption(label=name, value=name) for name in sorted(fields)],
        dates=list(DATE_FILTER_OPTIONS),
    )


__all__ = [
    "COMMENT_FIELD_LABEL",
    "apply_query",
    "build_filter_options",
    "build_predicate",
    "field_label",
    "matches_author",
    "matches_field",
    "matches_from",
    "matches_to",
    "paginate",
    "sort_by_timestamp_desc",
    "to_label",
]
