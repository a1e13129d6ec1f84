"""Use cases for aggregating issue activity behind the access gate."""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from issue_changelog.domain.entities import (
    DATE_FILTER_ALL,
    AccessDeniedError,
    AccessStatus,
    Activity,
    AttachmentActivity,
    ChangelogActivity,
    ChangelogError,
    CommentActivity,
    DateSelector,
    FilterOptions,
    FilterState,
    Page,
    ProjectDisabledError,
    ProjectUnresolvableError,
    UpstreamFetchError,
)
from issue_changelog.infrastructure.jira_client import IssueTrackerClient
from issue_changelog.infrastructure.policy_store import PolicyStore

from .access import first_access_violation
from .dedup import dedupe_activities
from .normalization import (
    normalize_attachments,
    normalize_changelog,
    normalize_comments,
)
from .query import apply_query, build_filter_options
from .time_window import DateWindow, build_date_window, parse_day

logger = logging.getLogger(__name__)

ERROR_PROJECT_UNRESOLVABLE = "project_unresolvable"
ERROR_ACCESS_DENIED = "access_denied"
ERROR_PROJECT_DISABLED = "project_disabled"
ERROR_FETCH = "fetch_error"

_ACCESS_ERRORS: dict[AccessStatus, type[ChangelogError]] = {
    AccessStatus.PROJECT_UNRESOLVABLE: ProjectUnresolvableError,
    AccessStatus.ACCESS_DENIED: AccessDeniedError,
    AccessStatus.PROJECT_DISABLED: ProjectDisabledError,
}
_ERROR_CODES: dict[type[ChangelogError], str] = {
    ProjectUnresolvableError: ERROR_PROJECT_UNRESOLVABLE,
    AccessDeniedError: ERROR_ACCESS_DENIED,
    ProjectDisabledError: ERROR_PROJECT_DISABLED,
}


@dataclass(frozen=True)
class ActivityRequest:
    """Parameters accepted by the aggregation entry point."""

    issue_keys: Sequence[str] | None = None
    issue_key: str | None = None
    context_issue_key: str | None = None
    filter: str | Mapping[str, Any] | None = None
    from_date: Any = None
    to_date: Any = None


@dataclass
class ActivityFeed:
    """Deduplicated activity of the requested issues, split by type.

    Failures keep the same shape with empty lists and an ``error`` message.
    """

    changelog: list[ChangelogActivity] = field(default_factory=list)
    comments: list[CommentActivity] = field(default_factory=list)
    attachments: list[AttachmentActivity] = field(default_factory=list)
    error: str | None = None
    error_code: str | None = None

    @property
    def total(self) -> int:
        return len(self.changelog) + len(self.comments) + len(self.attachments)

    @property
    def activities(self) -> list[Activity]:
        return [*self.changelog, *self.comments, *self.attachments]

    @classmethod
    def failure(cls, message: str, code: str) -> "ActivityFeed":
        return cls(error=message, error_code=code)


@dataclass
class ActivityQueryResult:
    """A feed snapshot together with one filtered page of it."""

    feed: ActivityFeed
    page: Page[Activity]
    options: FilterOptions


def resolve_issue_keys(request: ActivityRequest, default_issue_key: str) -> list[str]:
    """Explicit keys first, then the contextual issue, then the single key."""

    if request.issue_keys:
        return [key for key in request.issue_keys if key]
    if request.context_issue_key:
        return [request.context_issue_key]
    return [request.issue_key or default_issue_key]


def resolve_filter_value(raw: str | Mapping[str, Any] | None) -> str:
    """Accept either ``"7d"`` or a select option such as ``{"value": "7d"}``."""

    if isinstance(raw, str):
        return raw or DATE_FILTER_ALL
    if isinstance(raw, Mapping):
        value = raw.get("value")
        if isinstance(value, str) and value:
            return value
    return DATE_FILTER_ALL


def build_request_window(
    request: ActivityRequest, reference: datetime | None = None
) -> DateWindow | None:
    """Coarse pre-merge bound derived from the request's filter."""

    selector = DateSelector(
        value=resolve_filter_value(request.filter),
        date_from=parse_day(request.from_date),
        date_to=parse_day(request.to_date),
    )
    return build_date_window(selector, reference)


def _ensure_access(
    store: PolicyStore, client: IssueTrackerClient, issue_keys: Sequence[str]
) -> None:
    decision = first_access_violation(store, client, issue_keys)
    if decision is not None:
        logger.info(
            "Rejecting activity request for %s: %s", decision.issue_key, decision.status.value
        )
        raise _ACCESS_ERRORS[decision.status](decision.message)


def fetch_issue_activity(
    client: IssueTrackerClient,
    issue_key: str,
    window: DateWindow | None,
    executor: ThreadPoolExecutor,
) -> tuple[list[ChangelogActivity], list[CommentActivity], list[AttachmentActivity]]:
    """Fetch and normalize one issue.

    A failed changelog fetch propagates and skips the whole issue; failed
    comment or attachment fetches contribute nothing.
    """

    histories = client.get_changelog_histories(issue_key)
    comments_future = executor.submit(client.get_comments, issue_key)
    attachments_future = executor.submit(client.get_attachments, issue_key)

    try:
        raw_comments = comments_future.result()
    except UpstreamFetchError as exc:
        logger.warning("Error fetching comments for %s: %s", issue_key, exc)
        raw_comments = []
    try:
        raw_attachments = attachments_future.result()
    except UpstreamFetchError as exc:
        logger.warning("Error fetching attachments for %s: %s", issue_key, exc)
        raw_attachments = []

    return (
        normalize_changelog(issue_key, histories, window),
        normalize_comments(issue_key, raw_comments, window),
        normalize_attachments(issue_key, raw_attachments, window),
    )


def _split_by_type(activities: Sequence[Activity], feed: ActivityFeed) -> ActivityFeed:
    for activity in activities:
        if isinstance(activity, ChangelogActivity):
            feed.changelog.append(activity)
        elif isinstance(activity, CommentActivity):
            feed.comments.append(activity)
        else:
            feed.attachments.append(activity)
    return feed


def get_issue_activity(
    store: PolicyStore,
    client: IssueTrackerClient,
    request: ActivityRequest,
    *,
    default_issue_key: str,
    reference: datetime | None = None,
) -> ActivityFeed:
    """Return the deduplicated activity of every requested issue.

    Never raises for policy or upstream failures: gate rejections come back
    as an :class:`ActivityFeed` carrying the matching error message.
    """

    issue_keys = resolve_issue_keys(request, default_issue_key)
    try:
        _ensure_access(store, client, issue_keys)
    except (ProjectUnresolvableError, AccessDeniedError, ProjectDisabledError) as exc:
        return ActivityFeed.failure(str(exc), _ERROR_CODES[type(exc)])

    window = build_request_window(request, reference)
    collected: list[Activity] = []
    try:
        with ThreadPoolExecutor(max_workers=2) as executor:
            # Issues are resolved one after another to bound upstream load.
            for issue_key in issue_keys:
                try:
                    changelog, comments, attachments = fetch_issue_activity(
                        client, issue_key, window, executor
                    )
                except UpstreamFetchError as exc:
                    logger.warning("Skipping issue %s: %s", issue_key, exc)
                    continue
                collected.extend(changelog)
                collected.extend(comments)
                collected.extend(attachments)
    except ChangelogError as exc:
        logger.exception("Activity aggregation failed")
        return ActivityFeed.failure(str(exc), ERROR_FETCH)

    feed = _split_by_type(dedupe_activities(collected), ActivityFeed())
    logger.info(
        "Result summary: changelog=%d comments=%d attachments=%d total=%d",
        len(feed.changelog),
        len(feed.comments),
        len(feed.attachments),
        feed.total,
    )
    return feed


def query_issue_activity(
    store: PolicyStore,
    client: IssueTrackerClient,
    request: ActivityRequest,
    filters: FilterState,
    *,
    default_issue_key: str,
    reference: datetime | None = None,
) -> ActivityQueryResult:
    """Aggregate the feed and return one filtered, sorted page of it."""

    feed = get_issue_activity(
        store, client, request, default_issue_key=default_issue_key, reference=reference
    )
    activities = feed.activities
    return ActivityQueryResult(
        feed=feed,
        page=apply_query(activities, filters, reference=reference),
        options=build_filter_options(activities),
    )


__all__ = [
    "ActivityFeed",
    "ActivityQueryResult",
    "ActivityRequest",
    "ERROR_ACCESS_DENIED",
    "ERROR_FETCH",
    "ERROR_PROJECT_DISABLED",
    "ERROR_PROJECT_UNRESOLVABLE",
    "build_request_window",
    "fetch_issue_activity",
    "get_issue_activity",
    "query_issue_activity",
    "resolve_filter_value",
    "resolve_issue_keys",
]
