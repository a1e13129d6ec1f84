"""Domain entities describing normalized issue activity."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Union

ACTIVITY_TYPE_CHANGELOG = "changelog"
ACTIVITY_TYPE_COMMENT = "comment"
ACTIVITY_TYPE_ATTACHMENT = "attachment"

UNKNOWN_AUTHOR = "Unknown"
EMPTY_VALUE = "-"
COMMENT_PLACEHOLDER = "Comment content unavailable"


@dataclass(frozen=True)
class ChangelogActivity:
    """A single field change taken from an issue changelog history."""

    issue_key: str
    author: str
    field: str
    from_value: str
    to_value: str
    date: str
    type: str = field(default=ACTIVITY_TYPE_CHANGELOG, init=False)

    @property
    def timestamp(self) -> str:
        return self.date


@dataclass(frozen=True)
class CommentActivity:
    """A comment posted on an issue."""

    issue_key: str
    author: str
    content: str
    id: str
    created: str
    updated: str | None = None
    type: str = field(default=ACTIVITY_TYPE_COMMENT, init=False)

    @property
    def timestamp(self) -> str:
        return self.created


@dataclass(frozen=True)
class AttachmentActivity:
    """A file attached to an issue."""

    issue_key: str
    author: str
    filename: str
    size: int
    mime_type: str
    id: str
    created: str
    content: str | None = None
    type: str = field(default=ACTIVITY_TYPE_ATTACHMENT, init=False)

    @property
    def timestamp(self) -> str:
        return self.created

    @property
    def size_label(self) -> str:
        """Size in whole kilobytes, rounded half up, e.g. ``"12KB"``."""

        return f"{int(self.size / 1024 + 0.5)}KB"


Activity = Union[ChangelogActivity, CommentActivity, AttachmentActivity]


__all__ = [
    "ACTIVITY_TYPE_ATTACHMENT",
    "ACTIVITY_TYPE_CHANGELOG",
    "ACTIVITY_TYPE_COMMENT",
    "Activity",
    "AttachmentActivity",
    "ChangelogActivity",
    "COMMENT_PLACEHOLDER",
    "CommentActivity",
    "EMPTY_VALUE",
    "UNKNOWN_AUTHOR",
]
