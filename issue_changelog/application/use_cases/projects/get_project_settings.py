"""Use case for reading the settings page of a project."""

from issue_changelog.domain.entities import (
    JiraProject,
    ProjectSettingsView,
    UpstreamFetchError,
)
from issue_changelog.infrastructure.jira_client import IssueTrackerClient
from issue_changelog.infrastructure.policy_store import PolicyStore

from ..access import check_project_access, is_project_admin, is_project_enabled


def get_project_settings(
    store: PolicyStore,
    client: IssueTrackerClient,
    caller: IssueTrackerClient,
    *,
    project_key: str,
) -> ProjectSettingsView:
    """Return the project together with its allowlist and toggle state.

    Project details are read with ``client``; the administrator flag is
    evaluated for ``caller``. A project outside the allowlist is always
    reported as disabled.
    """

    try:
        project = JiraProject.from_payload(client.get_project(project_key))
    except UpstreamFetchError as exc:
        raise LookupError("Project not found") from exc

    has_permission = check_project_access(store, project_key)
    return ProjectSettingsView(
        project=project,
        has_permission=has_permission,
        is_enabled=has_permission and is_project_enabled(store, project_key),
        is_project_admin=is_project_admin(caller, project_key),
    )


__all__ = ["get_project_settings"]
