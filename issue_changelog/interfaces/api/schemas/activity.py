"""Pydantic schemas for the activity feed endpoints."""

from __future__ import annotations

from datetime import date
from typing import Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from issue_changelog.application.use_cases.activity import ActivityRequest
from issue_changelog.domain.entities import (
    Activity,
    AttachmentActivity,
    ChangelogActivity,
    CommentActivity,
)


class CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, from_attributes=True
    )


class ActivityRequestBody(CamelModel):
    issue_keys: list[str] | None = Field(
        default=None, description="Issues to aggregate; takes precedence over issueKey"
    )
    issue_key: str | None = Field(default=None, description="Single issue to aggregate")
    context_issue_key: str | None = Field(
        default=None, description="Issue the caller is currently viewing"
    )
    filter: str | dict[str, Any] | None = Field(
        default=None,
        description="Date selector such as '7d' or a select option {'value': '7d'}",
    )
    from_date: str | date | None = Field(
        default=None, description="First day of a custom range (ISO date or datetime)"
    )
    to_date: str | date | None = Field(
        default=None, description="Last day of a custom range (ISO date or datetime)"
    )

    def to_request(self) -> ActivityRequest:
        return ActivityRequest(
            issue_keys=self.issue_keys,
            issue_key=self.issue_key,
            context_issue_key=self.context_issue_key,
            filter=self.filter,
            from_date=self.from_date,
            to_date=self.to_date,
        )


class ChangelogRead(CamelModel):
    type: Literal["changelog"] = "changelog"
    issue_key: str
    author: str
    field: str
    from_value: str = Field(alias="from")
    to_value: str = Field(alias="to")
    date: str
    timestamp: str


class CommentRead(CamelModel):
    type: Literal["comment"] = "comment"
    issue_key: str
    author: str
    content: str
    id: str
    created: str
    updated: str | None = None
    timestamp: str


class AttachmentRead(CamelModel):
    type: Literal["attachment"] = "attachment"
    issue_key: str
    author: str
    filename: str
    size: int
    size_label: str
    mime_type: str
    id: str
    created: str
    content: str | None = None
    timestamp: str


ActivityRead = Union[ChangelogRead, CommentRead, AttachmentRead]

_READ_MODELS: dict[type, type[CamelModel]] = {
    ChangelogActivity: ChangelogRead,
    CommentActivity: CommentRead,
    AttachmentActivity: AttachmentRead,
}


def activity_to_schema(activity: Activity) -> ActivityRead:
    return _READ_MODELS[type(activity)].model_validate(activity)  # type: ignore[return-value]


class ActivityFeedRead(CamelModel):
    changelog: list[ChangelogRead] = Field(default_factory=list)
    comments: list[CommentRead] = Field(default_factory=list)
    attachments: list[AttachmentRead] = Field(default_factory=list)
    total: int = 0
    error: str | None = Field(default=None, description="Why the feed could not be served")
    error_code: str | None = None


__all__ = [
    "ActivityFeedRead",
    "ActivityRead",
    "ActivityRequestBody",
    "AttachmentRead",
    "CamelModel",
    "ChangelogRead",
    "CommentRead",
    "activity_to_schema",
]
