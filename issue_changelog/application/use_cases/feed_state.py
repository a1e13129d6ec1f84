"""Lifecycle of one activity feed session.

``IDLE -> LOADING -> READY``; filtering and pagination are derived from the
loaded snapshot and never re-enter ``LOADING``. Error states only describe
the latest load and are left again by the next :meth:`ActivityFeedView.refresh`.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime
from enum import Enum
from typing import Any

from issue_changelog.domain.entities import (
    DEFAULT_PAGE_SIZE,
    Activity,
    FilterOptions,
    FilterState,
    Page,
)

from .activity import ERROR_ACCESS_DENIED, ERROR_PROJECT_DISABLED, ActivityFeed
from .dedup import dedupe_activities
from .query import apply_query, build_filter_options

logger = logging.getLogger(__name__)


class FeedStatus(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    READY = "ready"
    ACCESS_DENIED = "access_denied"
    PROJECT_DISABLED = "project_disabled"
    FETCH_ERROR = "fetch_error"


_ERROR_STATUSES = {
    ERROR_ACCESS_DENIED: FeedStatus.ACCESS_DENIED,
    ERROR_PROJECT_DISABLED: FeedStatus.PROJECT_DISABLED,
}


class ActivityFeedView:
    """Hold a fetched snapshot and the filter state applied to it."""

    def __init__(
        self,
        loader: Callable[[], ActivityFeed],
        *,
        page_size: int = DEFAULT_PAGE_SIZE,
    ) -> None:
        self._loader = loader
        self.status = FeedStatus.IDLE
        self.filters = FilterState(page_size=page_size)
        self.activities: list[Activity] = []
        self.error: str | None = None

    def refresh(self) -> FeedStatus:
        """Fetch a new snapshot; the only transition into ``LOADING``."""

        self.status = FeedStatus.LOADING
        self.error = None
        feed = self._loader()
        if feed.error:
            self.activities = []
            self.error = feed.error
            self.status = _ERROR_STATUSES.get(feed.error_code or "", FeedStatus.FETCH_ERROR)
            logger.info("Feed load failed with %s", self.status.value)
        else:
            self.activities = dedupe_activities(feed.activities)
            self.status = FeedStatus.READY
        return self.status

    def update_filters(self, **changes: Any) -> Page[Activity]:
        self.filters = self.filters.with_filters(**changes)
        return self.current_page()

    def clear_filters(self) -> Page[Activity]:
        self.filters = self.filters.cleared()
        return self.current_page()

    def go_to_page(self, page: int) -> Page[Activity]:
        self.filters = self.filters.with_page(page)
        return self.current_page()

    def set_page_size(self, page_size: int) -> Page[Activity]:
        self.filters = self.filters.with_page_size(page_size)
        return self.current_page()

    def current_page(self, reference: datetime | None = None) -> Page[Activity]:
        return apply_query(self.activities, self.filters, reference=reference)

    @property
    def options(self) -> FilterOptions:
        return build_filter_options(self.activities)


__all__ = ["ActivityFeedView", "FeedStatus"]
