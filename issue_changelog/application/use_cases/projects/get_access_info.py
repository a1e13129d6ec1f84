"""Use case describing the allowlist from an issue's point of view."""

from __future__ import annotations

from issue_changelog.domain.entities import AccessInfo
from issue_changelog.infrastructure.jira_client import IssueTrackerClient
from issue_changelog.infrastructure.policy_store import PolicyStore
from issue_changelog.infrastructure.repositories import AccessPolicyRepository

from ..access import check_project_access, resolve_project_key


def get_access_info(
    store: PolicyStore,
    client: IssueTrackerClient,
    *,
    issue_key: str | None = None,
) -> AccessInfo:
    """Return the allowlist and, when ``issue_key`` resolves, its project's access."""

    allowed_projects = AccessPolicyRepository(store).get_allowed_projects()
    current_project = resolve_project_key(client, issue_key) if issue_key else None
    has_access = (
        check_project_access(store, current_project) if current_project else None
    )
    return AccessInfo(
        allowed_projects=allowed_projects,
        current_project=current_project,
        has_access=has_access,
    )


__all__ = ["get_access_info"]
