"""Access gate deciding whether a project's activity may be served."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from issue_changelog.domain.entities import (
    ALLOW_ALL_WHEN_EMPTY,
    AccessDecision,
    AccessStatus,
    PolicyStoreError,
    UpstreamFetchError,
)
from issue_changelog.infrastructure.jira_client import (
    ADMINISTER_PROJECTS,
    IssueTrackerClient,
)
from issue_changelog.infrastructure.policy_store import PolicyStore
from issue_changelog.infrastructure.repositories import AccessPolicyRepository

logger = logging.getLogger(__name__)

SITE_ADMIN_GROUPS = frozenset({"site-admins", "jira-administrators", "org-admins"})


def check_project_access(store: PolicyStore, project_key: str) -> bool:
    """Return ``True`` when ``project_key`` passes the site-wide allowlist.

    An empty allowlist is the bootstrap state and grants every project.
    Failing to read the allowlist denies access.
    """

    try:
        allowed_projects = AccessPolicyRepository(store).get_allowed_projects()
    except PolicyStoreError:
        logger.warning("Allowlist unavailable, denying access to %s", project_key)
        return False

    if not allowed_projects:
        return ALLOW_ALL_WHEN_EMPTY
    return project_key in allowed_projects


def is_project_enabled(store: PolicyStore, project_key: str) -> bool:
    """Return the per-project toggle, which defaults to enabled."""

    try:
        settings = AccessPolicyRepository(store).get_project_settings(project_key)
    except PolicyStoreError:
        logger.warning("Settings unavailable for %s, treating project as disabled", project_key)
        return False
    return settings.enabled


def is_project_admin(client: IssueTrackerClient, project_key: str) -> bool:
    """Return ``True`` when the caller may administer ``project_key``."""

    try:
        return client.has_permission(project_key, ADMINISTER_PROJECTS)
    except UpstreamFetchError:
        logger.warning("Permission lookup failed for project %s", project_key)
        return False


def is_site_admin(client: IssueTrackerClient) -> bool:
    """Return ``True`` when the caller belongs to a site administration group."""

    try:
        user = client.get_myself(expand_groups=True)
    except UpstreamFetchError:
        logger.warning("Could not load the current user's groups")
        return False
    groups = user.get("groups")
    items = groups.get("items") if isinstance(groups, dict) else None
    return any(
        isinstance(group, dict) and group.get("name") in SITE_ADMIN_GROUPS
        for group in items or []
    )


def resolve_project_key(client: IssueTrackerClient, issue_key: str) -> str | None:
    """Return the key of the project owning ``issue_key`` or ``None``."""

    try:
        return client.get_issue_project_key(issue_key)
    except UpstreamFetchError:
        logger.warning("Could not resolve the project of issue %s", issue_key)
        return None


def evaluate_issue_access(
    store: PolicyStore, client: IssueTrackerClient, issue_key: str
) -> AccessDecision:
    """Run both policy tiers for ``issue_key`` without raising."""

    project_key = resolve_project_key(client, issue_key)
    if not project_key:
        return AccessDecision(AccessStatus.PROJECT_UNRESOLVABLE, issue_key)

    if not check_project_access(store, project_key):
        logger.info("Project %s is not allowlisted", project_key)
        return AccessDecision(AccessStatus.ACCESS_DENIED, issue_key, project_key)

    if not is_project_enabled(store, project_key):
        logger.info("Project %s is allowlisted but disabled", project_key)
        return AccessDecision(AccessStatus.PROJECT_DISABLED, issue_key, project_key)

    return AccessDecision(AccessStatus.GRANTED, issue_key, project_key)


def first_access_violation(
    store: PolicyStore, client: IssueTrackerClient, issue_keys: Iterable[str]
) -> AccessDecision | None:
    """Return the first non-granted decision across ``issue_keys``, if any."""

    for issue_key in issue_keys:
        decision = evaluate_issue_access(store, client, issue_key)
        if not decision.granted:
            return decision
    return None


__all__ = [
    "SITE_ADMIN_GROUPS",
    "check_project_access",
    "evaluate_issue_access",
    "first_access_violation",
    "is_project_admin",
    "is_project_enabled",
    "is_site_admin",
    "resolve_project_key",
]
