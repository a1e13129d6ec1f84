"""Endpoint describing the allowlist from the caller's issue context."""

from fastapi import APIRouter, Depends, Query

from issue_changelog.application.use_cases.projects import get_access_info
from issue_changelog.domain.entities import PolicyStoreError
from issue_changelog.infrastructure.jira_client import IssueTrackerClient
from issue_changelog.infrastructure.policy_store import PolicyStore
from issue_changelog.interfaces.api.dependencies import (
    get_issue_tracker_client,
    get_policy_store,
)
from issue_changelog.interfaces.api.routes_helpers import raise_http_error
from issue_changelog.interfaces.api.schemas import AccessInfoRead

router = APIRouter(tags=["access"])


@router.get("/access-info", response_model=AccessInfoRead)
def read_access_info(
    issue_key: str | None = Query(None, alias="issueKey", description="Issue being viewed"),
    store: PolicyStore = Depends(get_policy_store),
    client: IssueTrackerClient = Depends(get_issue_tracker_client),
) -> AccessInfoRead:
    try:
        info = get_access_info(store, client, issue_key=issue_key)
    except PolicyStoreError as exc:
        raise_http_error(exc)
    return AccessInfoRead.model_validate(info)


__all__ = ["router"]
