"""FastAPI dependency utilities."""

from fastapi import Depends, Header, HTTPException, status
from sqlalchemy.orm import Session

from issue_changelog.application.use_cases.access import is_site_admin
from issue_changelog.infrastructure.database import get_db
from issue_changelog.infrastructure.jira_client import (
    IssueTrackerClient,
    JiraClient,
    JiraConfigurationError,
)
from issue_changelog.infrastructure.policy_store import PolicyStore, SqlPolicyStore


def get_policy_store(db: Session = Depends(get_db)) -> PolicyStore:
    """Return the policy store backed by the request's database session."""

    return SqlPolicyStore(db)


def _jira_unavailable(exc: JiraConfigurationError) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        detail=str(exc),
    )


def get_issue_tracker_client() -> IssueTrackerClient:
    """Return the service account's :class:`JiraClient` used for data reads."""

    try:
        return JiraClient.from_settings()
    except JiraConfigurationError as exc:
        raise _jira_unavailable(exc) from exc


def get_caller_client(
    authorization: str | None = Header(default=None),
) -> IssueTrackerClient:
    """Return a :class:`JiraClient` acting with the caller's own credentials."""

    if not authorization or not authorization.strip():
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Jira credentials are required",
            headers={"WWW-Authenticate": "Bearer"},
        )
    try:
        return JiraClient.for_caller(authorization.strip())
    except JiraConfigurationError as exc:
        raise _jira_unavailable(exc) from exc


def require_site_admin(
    caller: IssueTrackerClient = Depends(get_caller_client),
) -> IssueTrackerClient:
    """Ensure the calling account belongs to a site administration group."""

    if not is_site_admin(caller):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Access denied: Site administrator privileges required",
        )
    return caller
