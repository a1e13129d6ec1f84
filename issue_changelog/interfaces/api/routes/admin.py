"""Site administration endpoints managing the project allowlist."""

from fastapi import APIRouter, Depends, status

from issue_changelog.application.use_cases.projects import (
    add_allowed_project as add_allowed_project_uc,
    list_allowed_projects as list_allowed_projects_uc,
    list_available_projects as list_available_projects_uc,
    remove_allowed_project as remove_allowed_project_uc,
    setup_initial_access as setup_initial_access_uc,
)
from issue_changelog.domain.entities import (
    AllowedProjects,
    PolicyStoreError,
    UpstreamFetchError,
)
from issue_changelog.infrastructure.jira_client import IssueTrackerClient
from issue_changelog.infrastructure.policy_store import PolicyStore
from issue_changelog.interfaces.api.dependencies import (
    get_issue_tracker_client,
    get_policy_store,
    require_site_admin,
)
from issue_changelog.interfaces.api.routes_helpers import raise_http_error
from issue_changelog.interfaces.api.schemas import (
    AllowedProjectCreate,
    AllowedProjectsRead,
    InitialAccessSetupRead,
    InitialAccessSetupRequest,
    JiraProjectRead,
    ProjectMetadataRead,
)

router = APIRouter(prefix="/admin", tags=["admin"])


def _allowed_to_schema(allowed: AllowedProjects) -> AllowedProjectsRead:
    return AllowedProjectsRead(
        allowed_projects=allowed.keys,
        projects=[
            ProjectMetadataRead.model_validate(allowed.metadata[key])
            for key in allowed.keys
            if key in allowed.metadata
        ],
    )


@router.get("/projects", response_model=AllowedProjectsRead)
def list_allowed_projects(
    store: PolicyStore = Depends(get_policy_store),
    _: IssueTrackerClient = Depends(require_site_admin),
    client: IssueTrackerClient = Depends(get_issue_tracker_client),
) -> AllowedProjectsRead:
    """Return the allowlist, filling in missing project details."""

    try:
        allowed = list_allowed_projects_uc(store, client)
    except PolicyStoreError as exc:
        raise_http_error(exc)
    return _allowed_to_schema(allowed)


@router.get("/projects/available", response_model=list[JiraProjectRead])
def list_available_projects(
    _: IssueTrackerClient = Depends(require_site_admin),
    client: IssueTrackerClient = Depends(get_issue_tracker_client),
) -> list[JiraProjectRead]:
    """Return every project the service account can see."""

    try:
        projects = list_available_projects_uc(client)
    except UpstreamFetchError as exc:
        raise_http_error(exc)
    return [JiraProjectRead.model_validate(project) for project in projects]


@router.post(
    "/projects",
    response_model=AllowedProjectsRead,
    status_code=status.HTTP_201_CREATED,
)
def add_allowed_project(
    payload: AllowedProjectCreate,
    store: PolicyStore = Depends(get_policy_store),
    _: IssueTrackerClient = Depends(require_site_admin),
    client: IssueTrackerClient = Depends(get_issue_tracker_client),
) -> AllowedProjectsRead:
    """Allowlist a project and enable the app for it."""

    try:
        allowed = add_allowed_project_uc(store, client, project_key=payload.project_key)
    except (ValueError, PolicyStoreError) as exc:
        raise_http_error(exc)
    return _allowed_to_schema(allowed)


@router.delete("/projects/{project_key}", response_model=AllowedProjectsRead)
def remove_allowed_project(
    project_key: str,
    store: PolicyStore = Depends(get_policy_store),
    _: IssueTrackerClient = Depends(require_site_admin),
) -> AllowedProjectsRead:
    try:
        allowed = remove_allowed_project_uc(store, project_key=project_key)
    except (LookupError, PolicyStoreError) as exc:
        raise_http_error(exc)
    return _allowed_to_schema(allowed)


@router.post("/setup", response_model=InitialAccessSetupRead)
def setup_initial_access(
    payload: InitialAccessSetupRequest,
    store: PolicyStore = Depends(get_policy_store),
    _: IssueTrackerClient = Depends(require_site_admin),
) -> InitialAccessSetupRead:
    """Seed the allowlist of a fresh installation."""

    try:
        result = setup_initial_access_uc(store, project_keys=payload.project_keys)
    except PolicyStoreError as exc:
        raise_http_error(exc)
    return InitialAccessSetupRead.model_validate(result)


__all__ = ["router"]
