"""Library for testing a date/time against a pattern."""

from __future__ import annotations

import datetime

from .provider import CalendarProvider
from .settings import get_calendar_provider
from .types.pattern import Pattern

__all__ = ["matches"]


def matches(
    pattern: Pattern,
    value: datetime.datetime,
    provider: CalendarProvider | None = None,
) -> bool:
    """Return True if the date/time satisfies every fixed field of the pattern.

    Fields are checked from the plain date/time fields to the derived
    fields, stopping at the first one that does not match. The weekday
    ordinal is only checked when the weekday is fixed, and the week of the
    month only when the week of the year is not.
    """
    if provider is None:
        provider = get_calendar_provider()
    if pattern.year is not None and value.year != pattern.year:
        return False
    if pattern.month is not None and value.month != pattern.month:
        return False
    if pattern.day is not None and value.day != pattern.day:
        return False
    if pattern.hour is not None and value.hour != pattern.hour:
        return False
    if pattern.minute is not None and value.minute != pattern.minute:
        return False
    if pattern.weekday is not None and provider.iso_weekday(value) != pattern.weekday:
        return False
    if (
        ordinal := pattern.effective_weekday_ordinal
    ) is not None and provider.weekday_ordinal(value) != ordinal:
        return False
    if pattern.quarter is not None and provider.quarter(value) != pattern.quarter:
        return False
    if (
        week := pattern.effective_week_of_month
    ) is not None and provider.week_of_month(value) != week:
        return False
    if (
        pattern.week_of_year is not None
        and provider.week_of_year(value) != pattern.week_of_year
    ):
        return False
    return True
