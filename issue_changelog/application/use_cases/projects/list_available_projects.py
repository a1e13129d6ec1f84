"""Use case for listing every project visible to the configured account."""

from issue_changelog.domain.entities import JiraProject
from issue_changelog.infrastructure.jira_client import IssueTrackerClient


def list_available_projects(client: IssueTrackerClient) -> list[JiraProject]:
    projects = [JiraProject.from_payload(payload) for payload in client.list_projects()]
    return sorted(
        (project for project in projects if project.key),
        key=lambda project: project.name.lower(),
    )


__all__ = ["list_available_projects"]
