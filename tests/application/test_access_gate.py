"""Tests for the two-tier project access gate."""

from __future__ import annotations

import pytest

from issue_changelog.application.use_cases.access import (
    check_project_access,
    evaluate_issue_access,
    first_access_violation,
    is_project_admin,
    is_project_enabled,
    is_site_admin,
)
from issue_changelog.domain.entities import (
    ACCESS_DENIED_MESSAGE,
    PROJECT_DISABLED_MESSAGE,
    PROJECT_UNRESOLVABLE_MESSAGE,
    AccessStatus,
    PolicyStoreError,
)
from issue_changelog.infrastructure.policy_store import InMemoryPolicyStore


class BrokenStore:
    def get(self, key):
        raise PolicyStoreError(f"cannot read {key}")

    def set(self, key, value):
        raise PolicyStoreError(f"cannot write {key}")


@pytest.fixture()
def jira(fake_jira):
    return fake_jira(
        issues={
            "KC-1": {"project": "KC"},
            "KC-2": {"project": "KC"},
            "OPS-7": {"project": "OPS"},
        }
    )


@pytest.mark.parametrize("project_key", ["KC", "OPS", "ANYTHING"])
def test_empty_allowlist_grants_every_project(project_key: str) -> None:
    assert check_project_access(InMemoryPolicyStore(), project_key) is True


def test_allowlist_restricts_access() -> None:
    store = InMemoryPolicyStore({"allowedProjects": ["KC"]})

    assert check_project_access(store, "KC") is True
    assert check_project_access(store, "OPS") is False


def test_unreadable_allowlist_denies_access() -> None:
    assert check_project_access(BrokenStore(), "KC") is False


def test_project_toggle_defaults_to_enabled() -> None:
    store = InMemoryPolicyStore({"project_OPS_settings": {"enabled": False}})

    assert is_project_enabled(store, "KC") is True
    assert is_project_enabled(store, "OPS") is False
    assert is_project_enabled(BrokenStore(), "KC") is False


def test_granted_when_allowlisted_and_enabled(jira) -> None:
    store = InMemoryPolicyStore({"allowedProjects": ["KC"]})

    decision = evaluate_issue_access(store, jira, "KC-1")

    assert decision.granted
    assert decision.project_key == "KC"
    assert decision.message is None


def test_denied_and_disabled_are_distinguished(jira) -> None:
    store = InMemoryPolicyStore(
        {
            "allowedProjects": ["KC"],
            "project_KC_settings": {"enabled": False},
            "project_OPS_settings": {"enabled": False},
        }
    )

    disabled = evaluate_issue_access(store, jira, "KC-1")
    denied = evaluate_issue_access(store, jira, "OPS-7")

    assert disabled.status is AccessStatus.PROJECT_DISABLED
    assert disabled.message == PROJECT_DISABLED_MESSAGE
    assert denied.status is AccessStatus.ACCESS_DENIED
    assert denied.message == ACCESS_DENIED_MESSAGE


def test_unknown_issue_is_unresolvable(jira) -> None:
    decision = evaluate_issue_access(InMemoryPolicyStore(), jira, "NOPE-1")

    assert decision.status is AccessStatus.PROJECT_UNRESOLVABLE
    assert decision.message == PROJECT_UNRESOLVABLE_MESSAGE
    assert decision.project_key is None


def test_first_violation_is_reported(jira) -> None:
    store = InMemoryPolicyStore({"allowedProjects": ["KC"]})

    assert first_access_violation(store, jira, ["KC-1", "KC-2"]) is None
    violation = first_access_violation(store, jira, ["KC-1", "OPS-7", "NOPE-1"])
    assert violation is not None
    assert violation.issue_key == "OPS-7"
    assert violation.status is AccessStatus.ACCESS_DENIED


def test_admin_checks(fake_jira) -> None:
    admin = fake_jira(admin_projects={"KC"}, groups=["jira-administrators"])
    member = fake_jira(groups=["jira-software-users"])

    assert is_site_admin(admin) is True
    assert is_site_admin(member) is False
    assert is_project_admin(admin, "KC") is True
    assert is_project_admin(admin, "OPS") is False


def test_admin_checks_fail_closed(fake_jira) -> None:
    client = fake_jira(
        admin_projects={"KC"},
        groups=["site-admins"],
        failing={("myself", "*"), ("permission", "KC")},
    )

    assert is_site_admin(client) is False
    assert is_project_admin(client, "KC") is False


class _OddGroupsClient:
    def __init__(self, groups) -> None:
        self.groups = groups

    def get_myself(self, *, expand_groups: bool = False):
        return {"groups": self.groups}


@pytest.mark.parametrize(
    "groups",
    [["site-admins"], {"items": ["site-admins"]}, {"items": None}, None],
)
def test_malformed_group_payloads_are_not_admins(groups) -> None:
    assert is_site_admin(_OddGroupsClient(groups)) is False
