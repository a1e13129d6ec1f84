"""Typed access to the allowlist, project metadata and project settings."""

from __future__ import annotations

from typing import Any

from issue_changelog.domain.entities import (
    ALLOWED_PROJECTS_DATA_KEY,
    ALLOWED_PROJECTS_KEY,
    ProjectMetadata,
    ProjectSettings,
    project_settings_key,
)
from issue_changelog.infrastructure.policy_store import PolicyStore


class AccessPolicyRepository:
    """Translate raw store values into policy entities and back."""

    def __init__(self, store: PolicyStore) -> None:
        self.store = store

    def get_allowed_projects(self) -> list[str]:
        raw = self.store.get(ALLOWED_PROJECTS_KEY)
        if not isinstance(raw, list):
            return []
        return [str(key) for key in raw if key]

    def set_allowed_projects(self, project_keys: list[str]) -> None:
        self.store.set(ALLOWED_PROJECTS_KEY, list(project_keys))

    def get_projects_data(self) -> dict[str, ProjectMetadata]:
        raw = self.store.get(ALLOWED_PROJECTS_DATA_KEY)
        if not isinstance(raw, dict):
            return {}
        return {
            key: ProjectMetadata.from_payload(key, payload)
            for key, payload in raw.items()
            if isinstance(payload, dict)
        }

    def set_projects_data(self, data: dict[str, ProjectMetadata]) -> None:
        payload: dict[str, Any] = {key: entry.to_payload() for key, entry in data.items()}
        self.store.set(ALLOWED_PROJECTS_DATA_KEY, payload)

    def get_project_settings(self, project_key: str) -> ProjectSettings:
        raw = self.store.get(project_settings_key(project_key))
        return ProjectSettings.from_payload(raw if isinstance(raw, dict) else None)

    def set_project_settings(self, project_key: str, settings: ProjectSettings) -> None:
        self.store.set(project_settings_key(project_key), settings.to_payload())


__all__ = ["AccessPolicyRepository"]
