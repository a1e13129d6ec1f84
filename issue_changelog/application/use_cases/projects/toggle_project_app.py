"""Use case for switching the app on or off inside one project."""

from __future__ import annotations

import logging
from datetime import datetime

from issue_changelog.domain.entities import ProjectSettings
from issue_changelog.infrastructure.jira_client import IssueTrackerClient
from issue_changelog.infrastructure.policy_store import PolicyStore
from issue_changelog.infrastructure.repositories import AccessPolicyRepository
from issue_changelog.utils import format_timestamp, now_utc

from ..access import check_project_access, is_project_admin

logger = logging.getLogger(__name__)


def toggle_project_app(
    store: PolicyStore,
    caller: IssueTrackerClient,
    *,
    project_key: str,
    enabled: bool,
    now: datetime | None = None,
) -> ProjectSettings:
    """Persist the project-level toggle when ``caller`` administers the project."""

    if not check_project_access(store, project_key):
        raise ValueError("Project is not authorized by site administrator")

    if not is_project_admin(caller, project_key):
        raise PermissionError("Access denied: Project administrator privileges required")

    settings = ProjectSettings(
        enabled=bool(enabled), last_updated=format_timestamp(now or now_utc())
    )
    AccessPolicyRepository(store).set_project_settings(project_key, settings)
    logger.info("App %s for project %s", "enabled" if enabled else "disabled", project_key)
    return settings


__all__ = ["toggle_project_app"]
