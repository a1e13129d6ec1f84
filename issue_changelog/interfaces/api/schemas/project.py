"""Schemas for the project allowlist and project settings."""

from __future__ import annotations

from pydantic import Field

from .activity import CamelModel


class ProjectMetadataRead(CamelModel):
    key: str
    name: str
    id: str
    date_added: str


class AllowedProjectsRead(CamelModel):
    allowed_projects: list[str]
    projects: list[ProjectMetadataRead]


class AllowedProjectCreate(CamelModel):
    project_key: str = Field(min_length=1, description="Key of the project to allowlist")


class JiraProjectRead(CamelModel):
    key: str
    name: str
    id: str
    project_type_key: str | None = None


class ProjectSettingsRead(CamelModel):
    project: JiraProjectRead
    has_permission: bool
    is_enabled: bool
    is_project_admin: bool


class ProjectSettingsUpdate(CamelModel):
    enabled: bool


class ProjectToggleRead(CamelModel):
    enabled: bool
    last_updated: str | None = None


class AccessInfoRead(CamelModel):
    allowed_projects: list[str]
    current_project: str | None
    has_access: bool | None


class InitialAccessSetupRequest(CamelModel):
    project_keys: list[str] = Field(default_factory=list)


class InitialAccessSetupRead(CamelModel):
    configured: bool
    message: str
    allowed_projects: list[str]


__all__ = [
    "AccessInfoRead",
    "AllowedProjectCreate",
    "AllowedProjectsRead",
    "InitialAccessSetupRead",
    "InitialAccessSetupRequest",
    "JiraProjectRead",
    "ProjectMetadataRead",
    "ProjectSettingsRead",
    "ProjectSettingsUpdate",
    "ProjectToggleRead",
]
