"""Turn raw Jira histories, comments and attachments into activities.

Normalization is total: a malformed record falls back to default field
values, and only a record without a usable timestamp is dropped.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from datetime import datetime
from typing import Any

from issue_changelog.domain.entities import (
    COMMENT_PLACEHOLDER,
    EMPTY_VALUE,
    UNKNOWN_AUTHOR,
    Activity,
    AttachmentActivity,
    ChangelogActivity,
    CommentActivity,
    MalformedRecordError,
)
from issue_changelog.utils import format_timestamp, parse_timestamp

from .time_window import DateWindow

logger = logging.getLogger(__name__)

_BLOCK_NODE_TYPES = frozenset(
    {"paragraph", "heading", "blockquote", "codeBlock", "listItem", "panel"}
)


def _display_name(author: Any) -> str:
    if isinstance(author, Mapping):
        name = author.get("displayName")
        if isinstance(name, str) and name.strip():
            return name
    return UNKNOWN_AUTHOR


def _text_or_dash(value: Any) -> str:
    if value is None or value == "":
        return EMPTY_VALUE
    return str(value)


def _record_timestamp(record: Mapping[str, Any], field_name: str = "created") -> datetime:
    moment = parse_timestamp(record.get(field_name))
    if moment is None:
        raise MalformedRecordError(
            f"Record has no usable '{field_name}' value: {record.get(field_name)!r}"
        )
    return moment


def _in_window(moment: datetime, window: DateWindow | None) -> bool:
    return window is None or window.contains(moment)


def _collect_text(node: Any, blocks: list[str], current: list[str]) -> None:
    if isinstance(node, list):
        for child in node:
            _collect_text(child, blocks, current)
        return
    if not isinstance(node, Mapping):
        return

    node_type = node.get("type")
    if node_type == "text" and isinstance(node.get("text"), str):
        current.append(node["text"])
        return
    if node_type == "hardBreak":
        current.append("\n")
        return

    _collect_text(node.get("content"), blocks, current)
    if node_type in _BLOCK_NODE_TYPES and current:
        blocks.append("".join(current))
        current.clear()


def extract_comment_text(body: Any) -> str:
    """Return readable text for a comment body.

    Rich-text (Atlassian document format) bodies are flattened block by
    block; plain string bodies are returned as-is. Anything else yields the
    placeholder text.
    """

    if isinstance(body, str):
        return body if body.strip() else COMMENT_PLACEHOLDER
    if isinstance(body, Mapping):
        blocks: list[str] = []
        current: list[str] = []
        _collect_text(body.get("content"), blocks, current)
        if current:
            blocks.append("".join(current))
        text = "\n".join(block for block in blocks if block.strip())
        if text:
            return text
    return COMMENT_PLACEHOLDER


def normalize_changelog(
    issue_key: str,
    histories: Iterable[Any],
    window: DateWindow | None = None,
) -> list[ChangelogActivity]:
    """Expand every changed field of every history entry into an activity."""

    activities: list[ChangelogActivity] = []
    for history in histories or []:
        if not isinstance(history, Mapping):
            continue
        try:
            moment = _record_timestamp(history)
        except MalformedRecordError as exc:
            logger.warning("Skipping changelog history of %s: %s", issue_key, exc)
            continue
        if not _in_window(moment, window):
            continue

        author = _display_name(history.get("author"))
        date = format_timestamp(moment)
        items = history.get("items")
        for item in items if isinstance(items, list) else []:
            if not isinstance(item, Mapping):
                continue
            activities.append(
                ChangelogActivity(
                    issue_key=issue_key,
                    author=author,
                    field=_text_or_dash(item.get("field")),
                    from_value=_text_or_dash(item.get("fromString")),
                    to_value=_text_or_dash(item.get("toString")),
                    date=date,
                )
            )
    return activities


def normalize_comments(
    issue_key: str,
    comments: Iterable[Any],
    window: DateWindow | None = None,
) -> list[CommentActivity]:
    activities: list[CommentActivity] = []
    for comment in comments or []:
        if not isinstance(comment, Mapping):
            continue
        try:
            moment = _record_timestamp(comment)
        except MalformedRecordError as exc:
            logger.warning("Skipping comment of %s: %s", issue_key, exc)
            continue
        if not _in_window(moment, window):
            continue

        updated = parse_timestamp(comment.get("updated"))
        activities.append(
            CommentActivity(
                issue_key=issue_key,
                author=_display_name(comment.get("author")),
                content=extract_comment_text(comment.get("body")),
                id=str(comment.get("id") or ""),
                created=format_timestamp(moment),
                updated=format_timestamp(updated) if updated else None,
            )
        )
    return activities


def _attachment_size(value: Any) -> int:
    try:
        return max(int(value), 0)
    except (TypeError, ValueError):
        return 0


def normalize_attachments(
    issue_key: str,
    attachments: Iterable[Any],
    window: DateWindow | None = None,
) -> list[AttachmentActivity]:
    activities: list[AttachmentActivity] = []
    for attachment in attachments or []:
        if not isinstance(attachment, Mapping):
            continue
        try:
            moment = _record_timestamp(attachment)
        except MalformedRecordError as exc:
            logger.warning("Skipping attachment of %s: %s", issue_key, exc)
            continue
        if not _in_window(moment, window):
            continue

        content = attachment.get("content")
        activities.append(
            AttachmentActivity(
                issue_key=issue_key,
                author=_display_name(attachment.get("author")),
                filename=str(attachment.get("filename") or ""),
                size=_attachment_size(attachment.get("size")),
                mime_type=str(attachment.get("mimeType") or ""),
                id=str(attachment.get("id") or ""),
                created=format_timestamp(moment),
                content=str(content) if content is not None else None,
            )
        )
    return activities


def normalize_issue_activity(
    issue_key: str,
    histories: Iterable[Any],
    comments: Iterable[Any],
    attachments: Iterable[Any],
    window: DateWindow | None = None,
) -> list[Activity]:
    """Return changelog, comment and attachment activities of one issue."""

    activities: list[Activity] = []
    activities.extend(normalize_changelog(issue_key, histories, window))
    activities.extend(normalize_comments(issue_key, comments, window))
    activities.extend(normalize_attachments(issue_key, attachments, window))
    return activities


__all__ = [
    "extract_comment_text",
    "normalize_attachments",
    "normalize_changelog",
    "normalize_comments",
    "normalize_issue_activity",
]
