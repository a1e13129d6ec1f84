"""Domain entities exposed by the application."""

from .access_policy import (
    ACCESS_DENIED_MESSAGE,
    ALLOW_ALL_WHEN_EMPTY,
    ALLOWED_PROJECTS_DATA_KEY,
    ALLOWED_PROJECTS_KEY,
    PROJECT_DISABLED_MESSAGE,
    PROJECT_UNRESOLVABLE_MESSAGE,
    AccessDecision,
    AccessStatus,
    AllowedProjects,
    ProjectMetadata,
    ProjectSettings,
    project_settings_key,
)
from .activity import (
    ACTIVITY_TYPE_ATTACHMENT,
    ACTIVITY_TYPE_CHANGELOG,
    ACTIVITY_TYPE_COMMENT,
    COMMENT_PLACEHOLDER,
    EMPTY_VALUE,
    UNKNOWN_AUTHOR,
    Activity,
    AttachmentActivity,
    ChangelogActivity,
    CommentActivity,
)
from .errors import (
    AccessDeniedError,
    ChangelogError,
    MalformedRecordError,
    PolicyStoreError,
    ProjectDisabledError,
    ProjectUnresolvableError,
    UpstreamFetchError,
)
from .filters import (
    DATE_FILTER_ALL,
    DATE_FILTER_CUSTOM,
    DEFAULT_PAGE_SIZE,
    DateSelector,
    FilterOption,
    FilterOptions,
    FilterState,
    Page,
)
from .project import AccessInfo, InitialAccessSetup, JiraProject, ProjectSettingsView
from .timeline import IssueStatusTimeline, StatusSpan

__all__ = [
    "ACCESS_DENIED_MESSAGE",
    "ACTIVITY_TYPE_ATTACHMENT",
    "ACTIVITY_TYPE_CHANGELOG",
    "ACTIVITY_TYPE_COMMENT",
    "ALLOW_ALL_WHEN_EMPTY",
    "ALLOWED_PROJECTS_DATA_KEY",
    "ALLOWED_PROJECTS_KEY",
    "AccessDecision",
    "AccessDeniedError",
    "AccessInfo",
    "AccessStatus",
    "Activity",
    "AllowedProjects",
    "AttachmentActivity",
    "COMMENT_PLACEHOLDER",
    "ChangelogActivity",
    "ChangelogError",
    "CommentActivity",
    "DATE_FILTER_ALL",
    "DATE_FILTER_CUSTOM",
    "DEFAULT_PAGE_SIZE",
    "DateSelector",
    "EMPTY_VALUE",
    "FilterOption",
    "FilterOptions",
    "FilterState",
    "InitialAccessSetup",
    "IssueStatusTimeline",
    "JiraProject",
    "MalformedRecordError",
    "PROJECT_DISABLED_MESSAGE",
    "PROJECT_UNRESOLVABLE_MESSAGE",
    "Page",
    "PolicyStoreError",
    "ProjectDisabledError",
    "ProjectMetadata",
    "ProjectSettings",
    "ProjectSettingsView",
    "ProjectUnresolvableError",
    "StatusSpan",
    "UNKNOWN_AUTHOR",
    "UpstreamFetchError",
    "project_settings_key",
]
