"""Library for placing a candidate date/time near a reference point.

A search starts from an anchor: the first candidate next to the origin that
is consistent with the fixed fields of the pattern. The anchor is resolved
in passes from coarse to fine constraints, where each pass refines the
placement from the previous pass:

1. The plain year, month, day, hour and minute fields are set on the origin.
2. A fixed quarter moves the candidate to the start of the quarter.
3. A fixed week of the year (or else week of the month) moves the candidate
   to the Monday of that week.
4. A fixed weekday moves the candidate to the nth weekday of the month when
   an ordinal is fixed, or to the next/previous weekday otherwise.

Passes 2-4 then walk the candidate in the scan direction until it is
strictly past the reference point, and reset the time of day to the fixed
hour and minute (or midnight). The anchor is not guaranteed to satisfy the
whole pattern when fields contradict each other; the enumerator verifies
every candidate before it is reported.

The same passes are used by the enumerator when it moves to a new month or
year, with the current match as the reference point instead of the origin.
"""

from __future__ import annotations

import datetime
import logging

from .provider import CalendarProvider
from .settings import get_calendar_provider
from .types.component import Direction
from .types.pattern import Pattern

__all__ = [
    "resolve_anchor",
    "place_in_cycle",
    "reset_time_of_day",
]

_LOGGER = logging.getLogger(__name__)


def reset_time_of_day(
    pattern: Pattern, value: datetime.datetime, provider: CalendarProvider
) -> datetime.datetime:
    """Set the hour and minute to the fixed values, or midnight when unset."""
    return provider.with_fields(
        value,
        hour=pattern.hour if pattern.hour is not None else 0,
        minute=pattern.minute if pattern.minute is not None else 0,
    )


def _scan_days(
    candidate: datetime.datetime,
    reference: datetime.datetime,
    direction: Direction,
    provider: CalendarProvider,
) -> datetime.datetime:
    """Walk one day at a time until the candidate is past the reference."""
    while not direction.is_beyond(candidate, reference):
        candidate = provider.shift(candidate, days=direction.sign)
    return candidate


def _place_weekday(
    pattern: Pattern,
    candidate: datetime.datetime,
    reference: datetime.datetime,
    direction: Direction,
    provider: CalendarProvider,
) -> datetime.datetime:
    if (weekday := pattern.weekday) is None:
        return candidate
    if (ordinal := pattern.effective_weekday_ordinal) is not None:
        candidate = provider.nth_weekday_of_month(candidate, ordinal, weekday)
        while not direction.is_beyond(candidate, reference):
            candidate = provider.nth_weekday_of_month(
                provider.shift(candidate, months=direction.sign), ordinal, weekday
            )
    elif direction is Direction.FORWARD:
        candidate = provider.next_weekday(
            candidate, weekday, inclusive=candidate > reference
        )
    else:
        candidate = provider.previous_weekday(
            candidate, weekday, inclusive=candidate < reference
        )
    return reset_time_of_day(pattern, candidate, provider)


def place_in_cycle(
    pattern: Pattern,
    candidate: datetime.datetime,
    reference: datetime.datetime,
    direction: Direction,
    provider: CalendarProvider,
) -> datetime.datetime:
    """Apply the quarter, week and weekday passes to a candidate.

    Each pass only runs when its field is fixed in the pattern.
    """
    if pattern.quarter is not None:
        candidate = provider.start_of_quarter(candidate, pattern.quarter)
        candidate = _scan_days(candidate, reference, direction, provider)
        candidate = reset_time_of_day(pattern, candidate, provider)

    if pattern.week_of_year is not None:
        candidate = provider.with_week_of_year(candidate, pattern.week_of_year)
        candidate = _scan_days(candidate, reference, direction, provider)
        candidate = reset_time_of_day(pattern, candidate, provider)
    elif pattern.week_of_month is not None:
        candidate = provider.with_week_of_month(candidate, pattern.week_of_month)
        candidate = _scan_days(candidate, reference, direction, provider)
        candidate = reset_time_of_day(pattern, candidate, provider)

    return _place_weekday(pattern, candidate, reference, direction, provider)


def resolve_anchor(
    pattern: Pattern,
    origin: datetime.datetime,
    direction: Direction,
    provider: CalendarProvider | None = None,
) -> datetime.datetime:
    """Return the first candidate next to the origin consistent with the pattern.

    Raises `InvalidCalendarValueError` if the fixed fields can't be set on
    the origin, e.g. a fixed day that does not exist in the month.
    """
    if provider is None:
        provider = get_calendar_provider()
    candidate = provider.with_fields(
        origin,
        year=pattern.year,
        month=pattern.month,
        day=pattern.day,
        hour=pattern.hour,
        minute=pattern.minute,
    )
    anchor = place_in_cycle(pattern, candidate, origin, direction, provider)
    _LOGGER.debug(
        "Resolved anchor %s for pattern '%s' from origin %s (%s)",
        anchor,
        pattern,
        origin,
        direction,
    )
    return anchor
