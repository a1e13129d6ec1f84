"""Endpoints serving the access-gated activity feed."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from issue_changelog.application.use_cases import (
    build_status_timelines,
    get_issue_activity,
    query_issue_activity,
)
from issue_changelog.application.use_cases.activity import resolve_filter_value
from issue_changelog.application.use_cases.time_window import parse_day
from issue_changelog.config import Settings, get_settings
from issue_changelog.domain.entities import DateSelector
from issue_changelog.infrastructure.jira_client import IssueTrackerClient
from issue_changelog.infrastructure.policy_store import PolicyStore
from issue_changelog.interfaces.api.dependencies import (
    get_issue_tracker_client,
    get_policy_store,
)
from issue_changelog.interfaces.api.schemas import (
    ActivityFeedRead,
    ActivityPageRead,
    ActivityQueryBody,
    ActivityQueryRead,
    ActivityRequestBody,
    FilterOptionsRead,
    IssueStatusTimelineRead,
    StatusTimelineResponse,
    activity_to_schema,
)

router = APIRouter(prefix="/activity", tags=["activity"])


@router.post("", response_model=ActivityFeedRead)
def read_issue_activity(
    payload: ActivityRequestBody | None = None,
    store: PolicyStore = Depends(get_policy_store),
    client: IssueTrackerClient = Depends(get_issue_tracker_client),
    settings: Settings = Depends(get_settings),
) -> ActivityFeedRead:
    """Return the deduplicated changelog, comments and attachments."""

    payload = payload or ActivityRequestBody()
    feed = get_issue_activity(
        store,
        client,
        payload.to_request(),
        default_issue_key=settings.default_issue_key,
    )
    return ActivityFeedRead.model_validate(feed)


@router.post("/query", response_model=ActivityQueryRead)
def query_activity(
    payload: ActivityQueryBody,
    store: PolicyStore = Depends(get_policy_store),
    client: IssueTrackerClient = Depends(get_issue_tracker_client),
    settings: Settings = Depends(get_settings),
) -> ActivityQueryRead:
    """Return one filtered page of the feed together with the filter choices."""

    result = query_issue_activity(
        store,
        client,
        payload.to_request(),
        payload.to_filter_state(settings.default_page_size),
        default_issue_key=settings.default_issue_key,
    )
    if result.feed.error:
        return ActivityQueryRead(
            error=result.feed.error, error_code=result.feed.error_code
        )

    page = result.page
    return ActivityQueryRead(
        page=ActivityPageRead(
            items=[activity_to_schema(activity) for activity in page.items],
            total_count=page.total_count,
            total_pages=page.total_pages,
            page=page.page,
            page_size=page.page_size,
            has_next=page.has_next,
            has_previous=page.has_previous,
        ),
        options=FilterOptionsRead.model_validate(result.options),
        total=result.feed.total,
    )


@router.post("/timeline", response_model=StatusTimelineResponse)
def read_status_timeline(
    payload: ActivityRequestBody | None = None,
    store: PolicyStore = Depends(get_policy_store),
    client: IssueTrackerClient = Depends(get_issue_tracker_client),
    settings: Settings = Depends(get_settings),
) -> StatusTimelineResponse:
    """Return how long each requested issue spent in each status."""

    payload = payload or ActivityRequestBody()
    request = payload.to_request()
    feed = get_issue_activity(
        store, client, request, default_issue_key=settings.default_issue_key
    )
    if feed.error:
        return StatusTimelineResponse(error=feed.error, error_code=feed.error_code)

    selector = DateSelector(
        value=resolve_filter_value(request.filter),
        date_from=parse_day(request.from_date),
        date_to=parse_day(request.to_date),
    )
    timelines = build_status_timelines(feed.changelog, selector)
    return StatusTimelineResponse(
        timelines=[IssueStatusTimelineRead.model_validate(item) for item in timelines]
    )


__all__ = ["router"]
