"""Removal of structurally identical activities."""

from __future__ import annotations

from collections.abc import Hashable, Iterable

from issue_changelog.domain.entities import (
    Activity,
    AttachmentActivity,
    ChangelogActivity,
    CommentActivity,
)


def activity_dedup_key(activity: Activity) -> Hashable:
    """Return the identity of ``activity`` across repeated fetches.

    Jira offers no idempotency token, so two comments with the same text
    posted in the same millisecond share a key and collapse into one.
    """

    if isinstance(activity, ChangelogActivity):
        return (
            activity.type,
            activity.timestamp,
            activity.field,
            activity.from_value,
            activity.to_value,
        )
    if isinstance(activity, AttachmentActivity):
        return (activity.type, activity.timestamp, activity.filename)
    if isinstance(activity, CommentActivity):
        return (activity.type, activity.timestamp, activity.content)
    raise TypeError(f"Unsupported activity: {activity!r}")


def dedupe_activities(activities: Iterable[Activity]) -> list[Activity]:
    """Drop later duplicates, keeping the first occurrence and the input order."""

    seen: set[Hashable] = set()
    unique: list[Activity] = []
    for activity in activities:
        key = activity_dedup_key(activity)
        if key in seen:
            continue
        seen.add(key)
        unique.append(activity)
    return unique


__all__ = ["activity_dedup_key", "dedupe_activities"]
