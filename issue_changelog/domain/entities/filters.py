"""Domain entities describing feed filters and paginated results."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import date
from typing import Any, Generic, Sequence, TypeVar

DEFAULT_PAGE_SIZE = 25

DATE_FILTER_ALL = "all"
DATE_FILTER_CUSTOM = "custom"

T = TypeVar("T")


@dataclass(frozen=True)
class DateSelector:
    """Relative keyword (``"1_week"``, ``"30d"``...) or a custom day range."""

    value: str = ""
    date_from: date | None = None
    date_to: date | None = None

    @property
    def is_custom(self) -> bool:
        return self.value == DATE_FILTER_CUSTOM

    @property
    def is_unbounded(self) -> bool:
        return self.value in ("", DATE_FILTER_ALL)


@dataclass(frozen=True)
class FilterState:
    """Column filters, date selector and pagination for one feed session.

    The state is never persisted server-side. Every filter change returns a
    new state positioned on the first page.
    """

    authors: tuple[str, ...] = ()
    fields: tuple[str, ...] = ()
    from_text: str = ""
    to_text: str = ""
    date: DateSelector = field(default_factory=DateSelector)
    page: int = 1
    page_size: int = DEFAULT_PAGE_SIZE

    def with_filters(self, **changes: Any) -> "FilterState":
        """Return a copy with ``changes`` applied and the page reset to 1."""

        if "authors" in changes:
            changes["authors"] = tuple(changes["authors"])
        if "fields" in changes:
            changes["fields"] = tuple(changes["fields"])
        return replace(self, page=1, **changes)

    def with_page(self, page: int) -> "FilterState":
        return replace(self, page=max(page, 1))

    def with_page_size(self, page_size: int) -> "FilterState":
        return replace(self, page=1, page_size=max(page_size, 1))

    def cleared(self) -> "FilterState":
        """Return the default state, keeping only the chosen page size."""

        return FilterState(page_size=self.page_size)


@dataclass(frozen=True)
class Page(Generic[T]):
    """One page of a sorted, filtered sequence."""

    items: Sequence[T]
    total_count: int
    total_pages: int
    page: int
    page_size: int

    @property
    def has_next(self) -> bool:
        return self.page < self.total_pages

    @property
    def has_previous(self) -> bool:
        return self.page > 1


@dataclass(frozen=True)
class FilterOption:
    label: str
    value: str


@dataclass(frozen=True)
class FilterOptions:
    """Choices offered by the filter controls for the current snapshot."""

    authors: list[FilterOption]
    fields: list[FilterOption]
    dates: list[FilterOption]


__all__ = [
    "DATE_FILTER_ALL",
    "DATE_FILTER_CUSTOM",
    "DEFAULT_PAGE_SIZE",
    "DateSelector",
    "FilterOption",
    "FilterOptions",
    "FilterState",
    "Page",
]
