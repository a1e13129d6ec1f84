"""Use case for listing the allowlist with its cached project details."""

from __future__ import annotations

import logging
from datetime import datetime

from issue_changelog.domain.entities import (
    AllowedProjects,
    ProjectMetadata,
    UpstreamFetchError,
)
from issue_changelog.infrastructure.jira_client import IssueTrackerClient
from issue_changelog.infrastructure.policy_store import PolicyStore
from issue_changelog.infrastructure.repositories import AccessPolicyRepository
from issue_changelog.utils import format_timestamp, now_utc

logger = logging.getLogger(__name__)


def list_allowed_projects(
    store: PolicyStore,
    client: IssueTrackerClient,
    *,
    now: datetime | None = None,
) -> AllowedProjects:
    """Return the allowlist, fetching details for keys that have none yet.

    Missing details are written back in a single update. A project that
    cannot be fetched is cached with its key as name.
    """

    repository = AccessPolicyRepository(store)
    keys = repository.get_allowed_projects()
    data = repository.get_projects_data()

    missing = [key for key in keys if key not in data]
    if missing:
        date_added = format_timestamp(now or now_utc())
        for key in missing:
            data[key] = _fetch_metadata(client, key, date_added)
        repository.set_projects_data(data)
        logger.info("Backfilled details for %d allowlisted project(s)", len(missing))

    return AllowedProjects(
        keys=keys,
        metadata={key: data[key] for key in keys},
    )


def _fetch_metadata(
    client: IssueTrackerClient, project_key: str, date_added: str
) -> ProjectMetadata:
    try:
        payload = client.get_project(project_key)
    except UpstreamFetchError:
        logger.warning("Could not fetch details for project %s", project_key)
        return ProjectMetadata(key=project_key, name=project_key, id="N/A", date_added=date_added)
    return ProjectMetadata(
        key=project_key,
        name=str(payload.get("name") or project_key),
        id=str(payload.get("id") or "N/A"),
        date_added=date_added,
    )


__all__ = ["list_allowed_projects"]
