from .activity import (
    ActivityFeedRead,
    ActivityRead,
    ActivityRequestBody,
    AttachmentRead,
    ChangelogRead,
    CommentRead,
    activity_to_schema,
)
from .project import (
    AccessInfoRead,
    AllowedProjectCreate,
    AllowedProjectsRead,
    InitialAccessSetupRead,
    InitialAccessSetupRequest,
    JiraProjectRead,
    ProjectMetadataRead,
    ProjectSettingsRead,
    ProjectSettingsUpdate,
    ProjectToggleRead,
)
from .query import (
    ActivityPageRead,
    ActivityQueryBody,
    ActivityQueryRead,
    FilterOptionRead,
    FilterOptionsRead,
)
from .timeline import IssueStatusTimelineRead, StatusSpanRead, StatusTimelineResponse

__all__ = [
    "AccessInfoRead",
    "ActivityFeedRead",
    "ActivityPageRead",
    "ActivityQueryBody",
    "ActivityQueryRead",
    "ActivityRead",
    "ActivityRequestBody",
    "AllowedProjectCreate",
    "AllowedProjectsRead",
    "AttachmentRead",
    "ChangelogRead",
    "CommentRead",
    "FilterOptionRead",
    "FilterOptionsRead",
    "InitialAccessSetupRead",
    "InitialAccessSetupRequest",
    "IssueStatusTimelineRead",
    "JiraProjectRead",
    "ProjectMetadataRead",
    "ProjectSettingsRead",
    "ProjectSettingsUpdate",
    "ProjectToggleRead",
    "StatusSpanRead",
    "StatusTimelineResponse",
    "activity_to_schema",
]
