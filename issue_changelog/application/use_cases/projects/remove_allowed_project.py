"""Use case for removing a project from the site-wide allowlist."""

import logging

from issue_changelog.domain.entities import AllowedProjects
from issue_changelog.infrastructure.policy_store import PolicyStore
from issue_changelog.infrastructure.repositories import AccessPolicyRepository

logger = logging.getLogger(__name__)


def remove_allowed_project(store: PolicyStore, *, project_key: str) -> AllowedProjects:
    """Drop ``project_key`` from the allowlist and its cached details."""

    repository = AccessPolicyRepository(store)
    keys = repository.get_allowed_projects()
    data = repository.get_projects_data()
    if project_key not in keys and project_key not in data:
        raise LookupError("Project not found in allowlist")

    data.pop(project_key, None)
    remaining = [key for key in keys if key != project_key]

    repository.set_projects_data(data)
    repository.set_allowed_projects(remaining)
    logger.info("Project %s removed from the allowlist", project_key)
    return AllowedProjects(keys=remaining, metadata=data)


__all__ = ["remove_allowed_project"]
