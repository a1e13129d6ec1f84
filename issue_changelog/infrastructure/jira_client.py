"""Thin client over the Jira Cloud REST API (v3)."""

from __future__ import annotations

import logging
from typing import Any, Protocol
from urllib.parse import quote

import requests
from requests.auth import HTTPBasicAuth

from issue_changelog.config import Settings, get_settings
from issue_changelog.domain.entities import UpstreamFetchError

logger = logging.getLogger(__name__)

ADMINISTER_PROJECTS = "ADMINISTER_PROJECTS"


class JiraConfigurationError(RuntimeError):
    """Raised when the Jira connection settings are incomplete."""


class IssueTrackerClient(Protocol):
    """Upstream operations the service relies on.

    Every method raises :class:`UpstreamFetchError` when Jira cannot be
    reached or answers with a non-2xx status.
    """

    def get_issue_project_key(self, issue_key: str) -> str | None: ...

    def get_changelog_histories(self, issue_key: str) -> list[dict[str, Any]]: ...

    def get_comments(self, issue_key: str) -> list[dict[str, Any]]: ...

    def get_attachments(self, issue_key: str) -> list[dict[str, Any]]: ...

    def get_project(self, project_key: str) -> dict[str, Any]: ...

    def list_projects(self) -> list[dict[str, Any]]: ...

    def get_myself(self, *, expand_groups: bool = False) -> dict[str, Any]: ...

    def has_permission(self, project_key: str, permission: str) -> bool: ...


class JiraClient:
    """Issue tracker client acting with one account's permissions.

    The service account built by :meth:`from_settings` reads issue data.
    Permission checks run through :meth:`for_caller`, which forwards the
    caller's own ``Authorization`` header.
    """

    def __init__(
        self,
        base_url: str,
        *,
        email: str | None = None,
        api_token: str | None = None,
        authorization: str | None = None,
        timeout: float = 30.0,
        session: requests.Session | None = None,
    ) -> None:
        if not base_url:
            raise JiraConfigurationError("JIRA_BASE_URL is not configured")
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.update({"Accept": "application/json"})
        if authorization:
            self.session.headers["Authorization"] = authorization
        elif email and api_token:
            self.session.auth = HTTPBasicAuth(email, api_token)

    @classmethod
    def from_settings(cls, settings: Settings | None = None) -> "JiraClient":
        settings = settings or get_settings()
        if not settings.jira_base_url:
            raise JiraConfigurationError("JIRA_BASE_URL is not configured")
        return cls(
            settings.jira_base_url,
            email=settings.jira_email,
            api_token=settings.jira_api_token,
            timeout=settings.jira_timeout_seconds,
        )

    @classmethod
    def for_caller(
        cls, authorization: str, settings: Settings | None = None
    ) -> "JiraClient":
        """Return a client acting as the caller identified by ``authorization``."""

        settings = settings or get_settings()
        if not settings.jira_base_url:
            raise JiraConfigurationError("JIRA_BASE_URL is not configured")
        return cls(
            settings.jira_base_url,
            authorization=authorization,
            timeout=settings.jira_timeout_seconds,
        )

    def _get(self, path: str, params: dict[str, Any] | None = None) -> Any:
        url = f"{self.base_url}/rest/api/3/{path}"
        try:
            response = self.session.get(url, params=params, timeout=self.timeout)
        except requests.exceptions.RequestException as exc:
            logger.warning("Jira request to %s failed: %s", url, exc)
            raise UpstreamFetchError(f"Could not reach Jira: {exc}") from exc

        if not response.ok:
            logger.warning(
                "Jira API error for %s: %s %s", url, response.status_code, response.text[:200]
            )
            raise UpstreamFetchError(
                f"Jira answered {response.status_code} for {path}",
                status_code=response.status_code,
            )
        try:
            return response.json()
        except ValueError as exc:
            raise UpstreamFetchError(f"Jira returned invalid JSON for {path}") from exc

    def _get_object(self, path: str, params: dict[str, Any] | None = None) -> dict[str, Any]:
        payload = self._get(path, params)
        if payload is None:
            return {}
        if not isinstance(payload, dict):
            logger.warning("Unexpected %s payload for %s", type(payload).__name__, path)
            raise UpstreamFetchError(f"Jira returned an unexpected payload for {path}")
        return payload

    @staticmethod
    def _section(payload: dict[str, Any], name: str) -> dict[str, Any]:
        section = payload.get(name)
        return section if isinstance(section, dict) else {}

    @staticmethod
    def _records(value: Any) -> list[dict[str, Any]]:
        if not isinstance(value, list):
            return []
        return [record for record in value if isinstance(record, dict)]

    @staticmethod
    def _issue_path(issue_key: str) -> str:
        return f"issue/{quote(issue_key, safe='')}"

    def get_issue_project_key(self, issue_key: str) -> str | None:
        payload = self._get_object(self._issue_path(issue_key), {"fields": "project"})
        project = self._section(self._section(payload, "fields"), "project")
        key = project.get("key")
        return key if isinstance(key, str) and key else None

    def get_changelog_histories(self, issue_key: str) -> list[dict[str, Any]]:
        payload = self._get_object(self._issue_path(issue_key), {"expand": "changelog"})
        return self._records(self._section(payload, "changelog").get("histories"))

    def get_comments(self, issue_key: str) -> list[dict[str, Any]]:
        payload = self._get_object(f"{self._issue_path(issue_key)}/comment")
        return self._records(payload.get("comments"))

    def get_attachments(self, issue_key: str) -> list[dict[str, Any]]:
        payload = self._get_object(self._issue_path(issue_key), {"fields": "attachment"})
        return self._records(self._section(payload, "fields").get("attachment"))

    def get_project(self, project_key: str) -> dict[str, Any]:
        return self._get_object(f"project/{quote(project_key, safe='')}")

    def list_projects(self) -> list[dict[str, Any]]:
        return self._records(self._get("project"))

    def get_myself(self, *, expand_groups: bool = False) -> dict[str, Any]:
        params = {"expand": "groups"} if expand_groups else None
        return self._get_object("myself", params)

    def has_permission(self, project_key: str, permission: str) -> bool:
        payload = self._get_object(
            "mypermissions", {"projectKey": project_key, "permissions": permission}
        )
        entry = self._section(self._section(payload, "permissions"), permission)
        return bool(entry.get("havePermission"))


__all__ = [
    "ADMINISTER_PROJECTS",
    "IssueTrackerClient",
    "JiraClient",
    "JiraConfigurationError",
]
