"""Integration tests for the activity endpoints."""

from __future__ import annotations

import pytest

pytest.importorskip("fastapi")
from fastapi.testclient import TestClient

from issue_changelog.infrastructure.policy_store import InMemoryPolicyStore
from issue_changelog.interfaces.api.dependencies import (
    get_issue_tracker_client,
    get_policy_store,
)
from main import create_app


@pytest.fixture()
def jira(fake_jira, records):
    return fake_jira(
        issues={
            "KC-24": {
                "project": "KC",
                "histories": [
                    records.history(
                        "2024-01-01T00:00:00.000Z",
                        ("status", "To Do", "In Progress"),
                        ("assignee", None, "Bob"),
                    ),
                    records.history("2024-01-03T06:00:00.000Z", ("status", "In Progress", "Done")),
                ],
                "comments": [records.comment("2024-01-02T00:00:00.000Z", "On it", author="Bob")],
                "attachments": [records.attachment("2024-01-02T12:00:00.000Z", "trace.log", size=512, author="Bob")],
            },
            "OPS-1": {"project": "OPS"},
        }
    )


@pytest.fixture()
def policy_store() -> InMemoryPolicyStore:
    return InMemoryPolicyStore()


@pytest.fixture()
def client(jira, policy_store):
    app = create_app()
    app.dependency_overrides[get_policy_store] = lambda: policy_store
    app.dependency_overrides[get_issue_tracker_client] = lambda: jira
    with TestClient(app) as test_client:
        yield test_client


def test_activity_uses_the_default_issue(client: TestClient) -> None:
    response = client.post("/activity", json={})

    assert response.status_code == 200
    body = response.json()
    assert body["total"] == 5
    assert body["error"] is None
    first = body["changelog"][0]
    assert first == {
        "type": "changelog",
        "issueKey": "KC-24",
        "author": "Ana",
        "field": "status",
        "from": "To Do",
        "to": "In Progress",
        "date": "2024-01-01T00:00:00.000Z",
        "timestamp": "2024-01-01T00:00:00.000Z",
    }
    assert body["changelog"][1]["from"] == "-"
    assert body["comments"][0]["content"] == "On it"
    assert body["attachments"][0]["sizeLabel"] == "1KB"
    assert body["attachments"][0]["mimeType"] == "application/octet-stream"


def test_activity_access_errors_keep_the_shape(client: TestClient, policy_store) -> None:
    policy_store.set("allowedProjects", ["KC"])

    response = client.post("/activity", json={"issueKey": "OPS-1"})

    assert response.status_code == 200
    body = response.json()
    assert body["errorCode"] == "access_denied"
    assert "not authorized" in body["error"]
    assert (body["changelog"], body["comments"], body["attachments"], body["total"]) == ([], [], [], 0)


def test_activity_custom_range(client: TestClient) -> None:
    response = client.post(
        "/activity",
        json={"issueKey": "KC-24", "filter": {"value": "custom"}, "fromDate": "2024-01-02", "toDate": "2024-01-02"},
    )

    body = response.json()
    assert body["total"] == 2
    assert body["changelog"] == []


def test_activity_custom_range_accepts_iso_datetimes(client: TestClient) -> None:
    response = client.post(
        "/activity",
        json={
            "issueKey": "KC-24",
            "filter": "custom",
            "fromDate": "2024-01-02T15:30:00.000Z",
            "toDate": "2024-01-02T08:00:00.000Z",
        },
    )

    assert response.status_code == 200
    body = response.json()
    assert body["total"] == 2
    assert body["changelog"] == []


def test_query_returns_page_and_options(client: TestClient) -> None:
    response = client.post(
        "/activity/query",
        json={"contextIssueKey": "KC-24", "authors": ["bob"], "pageSize": 1, "page": 2},
    )

    assert response.status_code == 200
    body = response.json()
    page = body["page"]
    assert page["totalCount"] == 2
    assert page["totalPages"] == 2
    assert page["hasPrevious"] is True and page["hasNext"] is False
    assert page["items"][0]["type"] == "comment"
    assert [option["value"] for option in body["options"]["authors"]] == ["Ana", "Bob"]
    assert body["total"] == 5


def test_query_validates_paging(client: TestClient) -> None:
    response = client.post("/activity/query", json={"page": 0})

    assert response.status_code == 422


def test_query_reports_gate_errors(client: TestClient, policy_store) -> None:
    policy_store.set("project_KC_settings", {"enabled": False})

    body = client.post("/activity/query", json={}).json()

    assert body["page"] is None
    assert body["errorCode"] == "project_disabled"


def test_timeline(client: TestClient) -> None:
    response = client.post("/activity/timeline", json={"issueKeys": ["KC-24"]})

    assert response.status_code == 200
    [timeline] = response.json()["timelines"]
    assert timeline["issueKey"] == "KC-24"
    spans = timeline["statusChanges"]
    assert [span["status"] for span in spans] == ["In Progress", "Done"]
    assert spans[0]["durationText"] == "2d 6h"
    assert spans[1]["durationText"] is None
