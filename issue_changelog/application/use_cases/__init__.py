"""Aggregate application use cases."""

from .activity import (
    ActivityFeed,
    ActivityQueryResult,
    ActivityRequest,
    get_issue_activity,
    query_issue_activity,
)
from .feed_state import ActivityFeedView, FeedStatus
from .timeline import build_status_timelines

__all__ = [
    "ActivityFeed",
    "ActivityFeedView",
    "ActivityQueryResult",
    "ActivityRequest",
    "FeedStatus",
    "build_status_timelines",
    "get_issue_activity",
    "query_issue_activity",
]
