"""Domain entities describing the two-tier project access policy."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Mapping

ALLOWED_PROJECTS_KEY = "allowedProjects"
ALLOWED_PROJECTS_DATA_KEY = "allowedProjectsData"

# An empty allowlist grants access to every project so that a fresh
# installation works before an administrator configures it.
ALLOW_ALL_WHEN_EMPTY = True

PROJECT_UNRESOLVABLE_MESSAGE = (
    "Unable to determine the project for this issue. Please try refreshing the "
    "page or contact your administrator if the problem persists."
)
ACCESS_DENIED_MESSAGE = (
    "This project is not authorized to use the Issue Change Log app. Please contact "
    "your Jira administrator to grant access for this project."
)
PROJECT_DISABLED_MESSAGE = (
    "The Issue Change Log app has been disabled for this project. Please contact "
    "your project administrator to enable it."
)


def project_settings_key(project_key: str) -> str:
    """Return the store key holding the settings of ``project_key``."""

    return f"project_{project_key}_settings"


class AccessStatus(str, Enum):
    """Outcome of evaluating whether an issue's project may be served."""

    GRANTED = "granted"
    PROJECT_UNRESOLVABLE = "project_unresolvable"
    ACCESS_DENIED = "access_denied"
    PROJECT_DISABLED = "project_disabled"


_STATUS_MESSAGES = {
    AccessStatus.PROJECT_UNRESOLVABLE: PROJECT_UNRESOLVABLE_MESSAGE,
    AccessStatus.ACCESS_DENIED: ACCESS_DENIED_MESSAGE,
    AccessStatus.PROJECT_DISABLED: PROJECT_DISABLED_MESSAGE,
}


@dataclass(frozen=True)
class AccessDecision:
    """Result of the access gate for one issue."""

    status: AccessStatus
    issue_key: str
    project_key: str | None = None

    @property
    def granted(self) -> bool:
        return self.status is AccessStatus.GRANTED

    @property
    def message(self) -> str | None:
        return _STATUS_MESSAGES.get(self.status)


@dataclass(frozen=True)
class ProjectMetadata:
    """Denormalized project details cached next to the allowlist."""

    key: str
    name: str
    id: str
    date_added: str

    @classmethod
    def from_payload(cls, key: str, payload: Mapping[str, Any]) -> "ProjectMetadata":
        return cls(
            key=str(payload.get("key") or key),
            name=str(payload.get("name") or key),
            id=str(payload.get("id") or "N/A"),
            date_added=str(payload.get("dateAdded") or ""),
        )

    def to_payload(self) -> dict[str, str]:
        return {
            "key": self.key,
            "name": self.name,
            "id": self.id,
            "dateAdded": self.date_added,
        }


@dataclass(frozen=True)
class ProjectSettings:
    """Per-project feature toggle. A missing entry means enabled."""

    enabled: bool = True
    last_updated: str | None = None

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any] | None) -> "ProjectSettings":
        if not payload:
            return cls()
        return cls(
            enabled=payload.get("enabled") is not False,
            last_updated=payload.get("lastUpdated"),
        )

    def to_payload(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"enabled": self.enabled}
        if self.last_updated is not None:
            payload["lastUpdated"] = self.last_updated
        return payload


@dataclass(frozen=True)
class AllowedProjects:
    """Snapshot of the allowlist together with its cached metadata."""

    keys: list[str]
    metadata: dict[str, ProjectMetadata]


__all__ = [
    "ACCESS_DENIED_MESSAGE",
    "ALLOW_ALL_WHEN_EMPTY",
    "ALLOWED_PROJECTS_DATA_KEY",
    "ALLOWED_PROJECTS_KEY",
    "AccessDecision",
    "AccessStatus",
    "AllowedProjects",
    "PROJECT_DISABLED_MESSAGE",
    "PROJECT_UNRESOLVABLE_MESSAGE",
    "ProjectMetadata",
    "ProjectSettings",
    "project_settings_key",
]
