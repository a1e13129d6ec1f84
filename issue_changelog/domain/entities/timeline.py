"""Domain entities for per-issue status timelines."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class StatusSpan:
    """Time an issue spent in one status."""

    status: str
    start_date: str
    end_date: str | None
    duration_seconds: float
    duration_text: str | None
    author: str


@dataclass(frozen=True)
class IssueStatusTimeline:
    """Ordered status spans of a single issue."""

    issue_key: str
    status_changes: list[StatusSpan]
    total_duration_seconds: float
    last_update: str | None


__all__ = ["IssueStatusTimeline", "StatusSpan"]
