"""Tests for turning raw Jira records into activities."""

from __future__ import annotations

from datetime import datetime, timezone

from issue_changelog.application.use_cases.normalization import (
    extract_comment_text,
    normalize_attachments,
    normalize_changelog,
    normalize_comments,
    normalize_issue_activity,
)
from issue_changelog.application.use_cases.time_window import DateWindow
from issue_changelog.domain.entities import (
    COMMENT_PLACEHOLDER,
    ChangelogActivity,
)


def test_each_history_item_becomes_an_activity(records) -> None:
    histories = [
        records.history(
            "2024-01-01T00:00:00.000+0000",
            ("status", "To Do", "In Progress"),
            ("assignee", None, "Bob"),
        )
    ]

    activities = normalize_changelog("KC-24", histories)

    assert activities == [
        ChangelogActivity("KC-24", "Ana", "status", "To Do", "In Progress", "2024-01-01T00:00:00.000Z"),
        ChangelogActivity("KC-24", "Ana", "assignee", "-", "Bob", "2024-01-01T00:00:00.000Z"),
    ]
    assert all(activity.type == "changelog" for activity in activities)


def test_malformed_records_fall_back_to_defaults() -> None:
    histories = [
        {
            "created": "2024-02-03T10:00:00.000Z",
            "author": {"displayName": "  "},
            "items": [{"field": None, "fromString": "", "toString": None}, "junk"],
        },
        {"created": "not a date", "items": [{"field": "status"}]},
        "junk",
    ]

    activities = normalize_changelog("KC-1", histories)

    assert len(activities) == 1
    assert activities[0].author == "Unknown"
    assert (activities[0].field, activities[0].from_value, activities[0].to_value) == ("-", "-", "-")


def test_window_drops_records_outside_it(records) -> None:
    window = DateWindow(start=datetime(2024, 1, 2, tzinfo=timezone.utc))
    histories = [
        records.history("2024-01-01T12:00:00.000Z", ("status", "A", "B")),
        records.history("2024-01-03T12:00:00.000Z", ("status", "B", "C")),
    ]

    activities = normalize_changelog("KC-1", histories, window)

    assert [activity.to_value for activity in activities] == ["C"]


def test_comment_text_flattens_rich_text_blocks() -> None:
    body = {
        "type": "doc",
        "content": [
            {
                "type": "paragraph",
                "content": [
                    {"type": "text", "text": "Hello "},
                    {"type": "text", "text": "world"},
                ],
            },
            {
                "type": "bulletList",
                "content": [
                    {
                        "type": "listItem",
                        "content": [
                            {"type": "paragraph", "content": [{"type": "text", "text": "item"}]}
                        ],
                    }
                ],
            },
        ],
    }

    assert extract_comment_text(body) == "Hello world\nitem"
    assert extract_comment_text("plain text") == "plain text"
    assert extract_comment_text({"type": "doc", "content": []}) == COMMENT_PLACEHOLDER
    assert extract_comment_text(None) == COMMENT_PLACEHOLDER


def test_comments_keep_creation_and_update_times(records) -> None:
    raw = records.comment("2024-01-05T08:30:00.000+0000", "Looks good", comment_id="10")
    raw["updated"] = "2024-01-06T08:30:00.000+0000"

    [activity] = normalize_comments("KC-1", [raw])

    assert activity.content == "Looks good"
    assert activity.id == "10"
    assert activity.created == "2024-01-05T08:30:00.000Z"
    assert activity.updated == "2024-01-06T08:30:00.000Z"
    assert activity.timestamp == activity.created


def test_attachments_report_size_in_kilobytes(records) -> None:
    raw = [
        records.attachment("2024-01-05T08:30:00.000Z", "report.pdf", size=1536),
        {"created": "2024-01-05T08:30:00.000Z", "filename": "broken.bin", "size": "n/a"},
    ]

    report, broken = normalize_attachments("KC-1", raw)

    assert report.size_label == "2KB"
    assert report.mime_type == "application/octet-stream"
    assert broken.size == 0
    assert broken.author == "Unknown"


def test_issue_activity_combines_every_kind(records) -> None:
    activities = normalize_issue_activity(
        "KC-1",
        [records.history("2024-01-01T00:00:00.000Z", ("status", "A", "B"))],
        [records.comment("2024-01-02T00:00:00.000Z", "hi")],
        [records.attachment("2024-01-03T00:00:00.000Z", "a.txt")],
    )

    assert [activity.type for activity in activities] == ["changelog", "comment", "attachment"]
