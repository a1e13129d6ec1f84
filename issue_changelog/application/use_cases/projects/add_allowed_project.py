"""Use case for adding a project to the site-wide allowlist."""

from __future__ import annotations

import logging
from datetime import datetime

from issue_changelog.domain.entities import (
    AllowedProjects,
    ProjectMetadata,
    ProjectSettings,
    UpstreamFetchError,
)
from issue_changelog.infrastructure.jira_client import IssueTrackerClient
from issue_changelog.infrastructure.policy_store import PolicyStore
from issue_changelog.infrastructure.repositories import AccessPolicyRepository
from issue_changelog.utils import format_timestamp, now_utc

logger = logging.getLogger(__name__)


def add_allowed_project(
    store: PolicyStore,
    client: IssueTrackerClient,
    *,
    project_key: str,
    now: datetime | None = None,
) -> AllowedProjects:
    """Allowlist ``project_key`` and enable the app for it.

    Keys already on the allowlist keep their settings; a project disabled
    by its administrators stays disabled.
    """

    project_key = (project_key or "").strip()
    if not project_key:
        raise ValueError("Project key is required")

    try:
        payload = client.get_project(project_key)
    except UpstreamFetchError as exc:
        raise ValueError("Failed to fetch project details") from exc

    timestamp = format_timestamp(now or now_utc())
    repository = AccessPolicyRepository(store)
    keys = repository.get_allowed_projects()
    data = repository.get_projects_data()

    if project_key not in data:
        data[project_key] = ProjectMetadata(
            key=project_key,
            name=str(payload.get("name") or project_key),
            id=str(payload.get("id") or "N/A"),
            date_added=timestamp,
        )
        repository.set_projects_data(data)

    if project_key in keys:
        logger.info("Project %s is already allowlisted", project_key)
        return AllowedProjects(keys=keys, metadata=data)

    keys.append(project_key)
    repository.set_allowed_projects(keys)
    repository.set_project_settings(
        project_key, ProjectSettings(enabled=True, last_updated=timestamp)
    )
    logger.info("Project %s added to the allowlist", project_key)
    return AllowedProjects(keys=keys, metadata=data)


__all__ = ["add_allowed_project"]
