"""Schemas for filtered, paginated activity queries."""

from __future__ import annotations

import datetime

from pydantic import Field

from issue_changelog.application.use_cases.time_window import parse_day
from issue_changelog.domain.entities import DateSelector, FilterState

from .activity import ActivityRead, ActivityRequestBody, CamelModel


class ActivityQueryBody(ActivityRequestBody):
    authors: list[str] = Field(default_factory=list, description="Author display names")
    fields: list[str] = Field(
        default_factory=list, description="Field labels, 'Comment' or attachment filenames"
    )
    from_text: str = Field(default="", description="Substring matched against the old value")
    to_text: str = Field(default="", description="Substring matched against the new value")
    date: str = Field(default="", description="Date selector applied to the snapshot")
    date_from: str | datetime.date | None = None
    date_to: str | datetime.date | None = None
    page: int = Field(default=1, ge=1)
    page_size: int | None = Field(default=None, ge=1, le=100)

    def to_filter_state(self, default_page_size: int) -> FilterState:
        return FilterState(
            authors=tuple(self.authors),
            fields=tuple(self.fields),
            from_text=self.from_text,
            to_text=self.to_text,
            date=DateSelector(
                value=self.date,
                date_from=parse_day(self.date_from),
                date_to=parse_day(self.date_to),
            ),
            page=self.page,
            page_size=self.page_size or default_page_size,
        )


class FilterOptionRead(CamelModel):
    label: str
    value: str


class FilterOptionsRead(CamelModel):
    authors: list[FilterOptionRead]
    fields: list[FilterOptionRead]
    dates: list[FilterOptionRead]


class ActivityPageRead(CamelModel):
    items: list[ActivityRead]
    total_count: int
    total_pages: int
    page: int
    page_size: int
    has_next: bool
    has_previous: bool


class ActivityQueryRead(CamelModel):
    page: ActivityPageRead | None = None
    options: FilterOptionsRead | None = None
    total: int = Field(default=0, description="Activities in the unfiltered snapshot")
    error: str | None = None
    error_code: str | None = None


__all__ = [
    "ActivityPageRead",
    "ActivityQueryBody",
    "ActivityQueryRead",
    "FilterOptionRead",
    "FilterOptionsRead",
]
