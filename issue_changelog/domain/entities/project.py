"""Domain entities describing Jira projects as seen by the service."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping


@dataclass(frozen=True)
class JiraProject:
    """Project details returned by the Jira REST API."""

    key: str
    name: str
    id: str
    project_type_key: str | None = None

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "JiraProject":
        key = str(payload.get("key") or "")
        return cls(
            key=key,
            name=str(payload.get("name") or key),
            id=str(payload.get("id") or ""),
            project_type_key=payload.get("projectTypeKey"),
        )


@dataclass(frozen=True)
class ProjectSettingsView:
    """State shown on a project's settings page."""

    project: JiraProject
    has_permission: bool
    is_enabled: bool
    is_project_admin: bool = False


@dataclass(frozen=True)
class AccessInfo:
    """Allowlist snapshot plus the access state of the contextual project."""

    allowed_projects: list[str]
    current_project: str | None
    has_access: bool | None


@dataclass(frozen=True)
class InitialAccessSetup:
    configured: bool
    message: str
    allowed_projects: list[str]


__all__ = ["AccessInfo", "InitialAccessSetup", "JiraProject", "ProjectSettingsView"]
