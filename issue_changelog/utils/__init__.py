"""Utility helpers for reusable functionality."""

from .datetime import (
    end_of_day,
    ensure_utc,
    format_timestamp,
    get_app_timezone,
    now_utc,
    parse_timestamp,
    start_of_day,
    subtract_months,
)

__all__ = [
    "end_of_day",
    "ensure_utc",
    "format_timestamp",
    "get_app_timezone",
    "now_utc",
    "parse_timestamp",
    "start_of_day",
    "subtract_months",
]
