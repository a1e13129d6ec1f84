"""Shared fixtures: an in-memory Jira double and an isolated database URL."""

from __future__ import annotations

import os
import sys
import tempfile
from pathlib import Path
from types import SimpleNamespace
from typing import Any

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

TEST_DB_PATH = Path(tempfile.gettempdir()) / "issue_changelog_test.db"
os.environ["DATABASE_URL"] = f"sqlite:///{TEST_DB_PATH}"
os.environ.pop("APP_TIMEZONE", None)

from issue_changelog.config import get_settings  # noqa: E402

get_settings.cache_clear()

from issue_changelog.domain.entities import UpstreamFetchError  # noqa: E402
from issue_changelog.infrastructure.jira_client import ADMINISTER_PROJECTS  # noqa: E402
from issue_changelog.infrastructure.policy_store import InMemoryPolicyStore  # noqa: E402


class FakeJiraClient:
    """Serve canned issues and projects; ``failing`` holds ``(kind, key)`` pairs."""

    def __init__(
        self,
        *,
        issues: dict[str, dict[str, Any]] | None = None,
        projects: dict[str, dict[str, Any]] | None = None,
        admin_projects: set[str] | None = None,
        groups: list[str] | None = None,
        failing: set[tuple[str, str]] | None = None,
    ) -> None:
        self.issues = issues or {}
        self.projects = projects or {}
        self.admin_projects = admin_projects or set()
        self.groups = groups or []
        self.failing = failing or set()
        self.calls: list[tuple[str, str]] = []

    def _check(self, kind: str, key: str) -> None:
        self.calls.append((kind, key))
        if (kind, key) in self.failing:
            raise UpstreamFetchError(f"{kind} unavailable for {key}", status_code=500)

    def _issue(self, issue_key: str) -> dict[str, Any]:
        if issue_key not in self.issues:
            raise UpstreamFetchError(f"Issue {issue_key} does not exist", status_code=404)
        return self.issues[issue_key]

    def get_issue_project_key(self, issue_key: str) -> str | None:
        self._check("project_key", issue_key)
        return self._issue(issue_key).get("project")

    def get_changelog_histories(self, issue_key: str) -> list[dict[str, Any]]:
        self._check("changelog", issue_key)
        return list(self._issue(issue_key).get("histories", []))

    def get_comments(self, issue_key: str) -> list[dict[str, Any]]:
        self._check("comments", issue_key)
        return list(self._issue(issue_key).get("comments", []))

    def get_attachments(self, issue_key: str) -> list[dict[str, Any]]:
        self._check("attachments", issue_key)
        return list(self._issue(issue_key).get("attachments", []))

    def get_project(self, project_key: str) -> dict[str, Any]:
        self._check("project", project_key)
        if project_key not in self.projects:
            raise UpstreamFetchError(f"Project {project_key} not found", status_code=404)
        return dict(self.projects[project_key])

    def list_projects(self) -> list[dict[str, Any]]:
        self._check("projects", "*")
        return [dict(project) for project in self.projects.values()]

    def get_myself(self, *, expand_groups: bool = False) -> dict[str, Any]:
        self._check("myself", "*")
        user: dict[str, Any] = {"displayName": "Test Admin"}
        if expand_groups:
            user["groups"] = {"items": [{"name": name} for name in self.groups]}
        return user

    def has_permission(self, project_key: str, permission: str) -> bool:
        self._check("permission", project_key)
        return permission == ADMINISTER_PROJECTS and project_key in self.admin_projects


def history(created: str, *items: tuple[str, Any, Any], author: str | None = "Ana") -> dict:
    return {
        "created": created,
        "author": {"displayName": author} if author else None,
        "items": [
            {"field": field, "fromString": old, "toString": new} for field, old, new in items
        ],
    }


def comment(created: str, text: str, *, author: str = "Ana", comment_id: str = "1") -> dict:
    return {
        "id": comment_id,
        "created": created,
        "author": {"displayName": author},
        "body": {
            "type": "doc",
            "content": [{"type": "paragraph", "content": [{"type": "text", "text": text}]}],
        },
    }


def attachment(created: str, filename: str, *, size: int = 2048, author: str = "Ana") -> dict:
    return {
        "id": f"att-{filename}",
        "created": created,
        "filename": filename,
        "size": size,
        "mimeType": "application/octet-stream",
        "author": {"displayName": author},
        "content": f"https://example.atlassian.net/attachments/{filename}",
    }


@pytest.fixture()
def store() -> InMemoryPolicyStore:
    return InMemoryPolicyStore()


@pytest.fixture()
def fake_jira():
    """Return the :class:`FakeJiraClient` factory."""

    return FakeJiraClient


@pytest.fixture()
def records():
    """Builders for raw Jira payloads."""

    return SimpleNamespace(history=history, comment=comment, attachment=attachment)
