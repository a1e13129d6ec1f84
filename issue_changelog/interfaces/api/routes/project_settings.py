"""Per-project settings endpoints."""

from fastapi import APIRouter, Depends

from issue_changelog.application.use_cases.projects import (
    get_project_settings as get_project_settings_uc,
    toggle_project_app as toggle_project_app_uc,
)
from issue_changelog.domain.entities import PolicyStoreError
from issue_changelog.infrastructure.jira_client import IssueTrackerClient
from issue_changelog.infrastructure.policy_store import PolicyStore
from issue_changelog.interfaces.api.dependencies import (
    get_caller_client,
    get_issue_tracker_client,
    get_policy_store,
)
from issue_changelog.interfaces.api.routes_helpers import raise_http_error
from issue_changelog.interfaces.api.schemas import (
    ProjectSettingsRead,
    ProjectSettingsUpdate,
    ProjectToggleRead,
)

router = APIRouter(prefix="/projects", tags=["project-settings"])


@router.get("/{project_key}/settings", response_model=ProjectSettingsRead)
def read_project_settings(
    project_key: str,
    store: PolicyStore = Depends(get_policy_store),
    client: IssueTrackerClient = Depends(get_issue_tracker_client),
    caller: IssueTrackerClient = Depends(get_caller_client),
) -> ProjectSettingsRead:
    """Return whether the app is authorized and enabled for the project."""

    try:
        view = get_project_settings_uc(store, client, caller, project_key=project_key)
    except LookupError as exc:
        raise_http_error(exc)
    return ProjectSettingsRead.model_validate(view)


@router.put("/{project_key}/settings", response_model=ProjectToggleRead)
def update_project_settings(
    project_key: str,
    payload: ProjectSettingsUpdate,
    store: PolicyStore = Depends(get_policy_store),
    caller: IssueTrackerClient = Depends(get_caller_client),
) -> ProjectToggleRead:
    """Enable or disable the app; project administrators only."""

    try:
        settings = toggle_project_app_uc(
            store, caller, project_key=project_key, enabled=payload.enabled
        )
    except (ValueError, PermissionError, PolicyStoreError) as exc:
        raise_http_error(exc)
    return ProjectToggleRead.model_validate(settings)


__all__ = ["router"]
