"""Tests for allowlist administration and project settings."""

from __future__ import annotations

from datetime import datetime, timezone

import pytest

from issue_changelog.application.use_cases.access import (
    check_project_access,
    is_project_enabled,
)
from issue_changelog.application.use_cases.projects import (
    add_allowed_project,
    get_access_info,
    get_project_settings,
    list_allowed_projects,
    list_available_projects,
    remove_allowed_project,
    setup_initial_access,
    toggle_project_app,
)
from issue_changelog.infrastructure.policy_store import InMemoryPolicyStore

NOW = datetime(2024, 5, 1, 9, 30, tzinfo=timezone.utc)
NOW_TEXT = "2024-05-01T09:30:00.000Z"


class CountingStore(InMemoryPolicyStore):
    def __init__(self, initial=None) -> None:
        super().__init__(initial)
        self.writes: list[str] = []

    def set(self, key, value) -> None:
        self.writes.append(key)
        super().set(key, value)


@pytest.fixture()
def jira(fake_jira):
    return fake_jira(
        issues={"KC-1": {"project": "KC"}, "OPS-1": {"project": "OPS"}},
        projects={
            "KC": {"key": "KC", "name": "Kanban Core", "id": "10000", "projectTypeKey": "software"},
            "OPS": {"key": "OPS", "name": "operations", "id": "10001"},
        },
        admin_projects={"KC"},
    )


def test_add_project_stores_metadata_and_enables_it(jira) -> None:
    store = InMemoryPolicyStore()

    allowed = add_allowed_project(store, jira, project_key="KC", now=NOW)

    assert allowed.keys == ["KC"]
    assert store.get("allowedProjects") == ["KC"]
    assert store.get("allowedProjectsData") == {
        "KC": {"key": "KC", "name": "Kanban Core", "id": "10000", "dateAdded": NOW_TEXT}
    }
    assert store.get("project_KC_settings") == {"enabled": True, "lastUpdated": NOW_TEXT}


def test_add_after_initial_setup_keeps_seeded_projects(jira) -> None:
    store = InMemoryPolicyStore()
    setup_initial_access(store, project_keys=["KC", "ABC"])

    allowed = add_allowed_project(store, jira, project_key="OPS", now=NOW)

    assert allowed.keys == ["KC", "ABC", "OPS"]
    assert store.get("allowedProjects") == ["KC", "ABC", "OPS"]
    assert list(store.get("allowedProjectsData")) == ["OPS"]
    assert check_project_access(store, "KC") is True
    assert check_project_access(store, "ABC") is True


def test_re_adding_an_allowlisted_project_keeps_its_settings(jira) -> None:
    store = InMemoryPolicyStore()
    add_allowed_project(store, jira, project_key="KC", now=NOW)
    toggle_project_app(store, jira, project_key="KC", enabled=False, now=NOW)
    later = datetime(2024, 6, 1, tzinfo=timezone.utc)

    allowed = add_allowed_project(store, jira, project_key="KC", now=later)

    assert allowed.keys == ["KC"]
    assert store.get("project_KC_settings") == {"enabled": False, "lastUpdated": NOW_TEXT}
    assert store.get("allowedProjectsData")["KC"]["dateAdded"] == NOW_TEXT
    assert is_project_enabled(store, "KC") is False


def test_add_unknown_project_fails(jira) -> None:
    store = InMemoryPolicyStore()

    with pytest.raises(ValueError, match="Failed to fetch project details"):
        add_allowed_project(store, jira, project_key="NOPE")
    with pytest.raises(ValueError, match="Project key is required"):
        add_allowed_project(store, jira, project_key="  ")
    assert store.get("allowedProjects") is None


def test_remove_project(jira) -> None:
    store = InMemoryPolicyStore()
    add_allowed_project(store, jira, project_key="KC", now=NOW)
    add_allowed_project(store, jira, project_key="OPS", now=NOW)

    allowed = remove_allowed_project(store, project_key="KC")

    assert allowed.keys == ["OPS"]
    assert list(store.get("allowedProjectsData")) == ["OPS"]
    with pytest.raises(LookupError):
        remove_allowed_project(store, project_key="KC")


def test_listing_backfills_missing_metadata_in_one_write(jira) -> None:
    store = CountingStore({"allowedProjects": ["KC", "GONE"]})

    allowed = list_allowed_projects(store, jira, now=NOW)

    assert store.writes == ["allowedProjectsData"]
    assert allowed.metadata["KC"].name == "Kanban Core"
    assert allowed.metadata["GONE"].name == "GONE"
    assert allowed.metadata["GONE"].id == "N/A"

    list_allowed_projects(store, jira, now=NOW)
    assert store.writes == ["allowedProjectsData"]


def test_available_projects_are_sorted_by_name(jira) -> None:
    assert [project.key for project in list_available_projects(jira)] == ["KC", "OPS"]


def test_access_info(jira) -> None:
    store = InMemoryPolicyStore({"allowedProjects": ["KC"]})

    info = get_access_info(store, jira, issue_key="OPS-1")
    assert (info.allowed_projects, info.current_project, info.has_access) == (["KC"], "OPS", False)

    info = get_access_info(store, jira)
    assert info.current_project is None and info.has_access is None


def test_project_settings_view(jira, fake_jira) -> None:
    member = fake_jira()
    store = InMemoryPolicyStore(
        {"allowedProjects": ["KC"], "project_OPS_settings": {"enabled": True}}
    )

    kc = get_project_settings(store, jira, jira, project_key="KC")
    ops = get_project_settings(store, jira, jira, project_key="OPS")

    assert (kc.has_permission, kc.is_enabled, kc.is_project_admin) == (True, True, True)
    assert kc.project.project_type_key == "software"
    assert (ops.has_permission, ops.is_enabled) == (False, False)
    assert get_project_settings(store, jira, member, project_key="KC").is_project_admin is False
    with pytest.raises(LookupError):
        get_project_settings(store, jira, jira, project_key="NOPE")


def test_toggle_requires_allowlist_and_project_admin(jira) -> None:
    store = InMemoryPolicyStore({"allowedProjects": ["KC", "OPS"]})

    settings = toggle_project_app(store, jira, project_key="KC", enabled=False, now=NOW)
    assert store.get("project_KC_settings") == {"enabled": False, "lastUpdated": NOW_TEXT}
    assert settings.enabled is False

    with pytest.raises(PermissionError, match="Project administrator privileges required"):
        toggle_project_app(store, jira, project_key="OPS", enabled=False)

    store.set("allowedProjects", ["OPS"])
    with pytest.raises(ValueError, match="not authorized by site administrator"):
        toggle_project_app(store, jira, project_key="KC", enabled=True)


def test_initial_setup_only_seeds_an_empty_allowlist() -> None:
    store = InMemoryPolicyStore()

    assert setup_initial_access(store).message == "No initial projects specified"
    first = setup_initial_access(store, project_keys=["KC", " OPS "])
    assert first.configured is True
    assert store.get("allowedProjects") == ["KC", "OPS"]

    second = setup_initial_access(store, project_keys=["OTHER"])
    assert second.configured is False
    assert second.message == "Access already configured for: KC, OPS"
    assert store.get("allowedProjects") == ["KC", "OPS"]
