"""Lenient date parsing shared by the resolution tiers."""

from __future__ import annotations

from datetime import UTC, date, datetime

from dateutil import parser as date_parser

# Missing components (month, day) fall back to January 1st.
_DEFAULT = datetime(2000, 1, 1)


def parse_date_value(value: str | None) -> date | None:
    """Parse a free-form date string into a calendar date.

    Timezone-aware values are converted to UTC before the calendar date is
    taken, so ``2021-03-15T23:30:00-05:00`` becomes ``2021-03-16``.

    Returns:
        The calendar date, or None if the value cannot be parsed.
    """
    if not value or not value.strip():
        return None
    try:
        parsed = date_parser.parse(value.strip(), default=_DEFAULT)
    except (ValueError, OverflowError):
        return None
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(UTC)
    return parsed.date()


def safe_date(year: int, month: int, day: int) -> date | None:
    """Build a date, returning None for impossible combinations like Feb 30."""
    try:
        return date(year, month, day)
    except ValueError:
        return None
