"""Schemas for issue status timelines."""

from __future__ import annotations

from pydantic import Field

from .activity import CamelModel


class StatusSpanRead(CamelModel):
    status: str
    start_date: str
    end_date: str | None
    duration_seconds: float
    duration_text: str | None = Field(description="Null while the status is still current")
    author: str


class IssueStatusTimelineRead(CamelModel):
    issue_key: str
    status_changes: list[StatusSpanRead]
    total_duration_seconds: float
    last_update: str | None


class StatusTimelineResponse(CamelModel):
    timelines: list[IssueStatusTimelineRead] = Field(default_factory=list)
    error: str | None = None
    error_code: str | None = None


__all__ = ["IssueStatusTimelineRead", "StatusSpanRead", "StatusTimelineResponse"]
