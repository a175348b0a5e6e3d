"""Library for the calendar arithmetic used when searching for matches.

The search algorithm does not do any date math itself, but asks a
`CalendarProvider` to move date/times around and to compute derived fields
such as the week number or quarter. This keeps the search independent of
the rules of any particular calendar library and allows it to be exercised
with a fake provider.

`IsoCalendar` is the default provider, built on `dateutil.relativedelta`.

Week numbers follow the ISO convention for the first day of the week and
the minimal number of days in the first week: weeks start on a Monday, and
week 1 of a month (or year) is the first week with at least four days in
that month (or year). Days before week 1 belong to week 0. Unlike the ISO
week-based-year, the week number is always relative to the calendar month
or year the date falls in, so the last days of December can be in week 53
and the first days of January in week 0.
"""

from __future__ import annotations

import datetime
from abc import ABC, abstractmethod

from dateutil.relativedelta import MO, TU, WE, TH, FR, SA, SU, relativedelta
from dateutil.relativedelta import weekday as relativedelta_weekday

from .exceptions import InvalidCalendarValueError

__all__ = [
    "CalendarProvider",
    "IsoCalendar",
]

MINIMAL_DAYS_IN_FIRST_WEEK = 4
DAYS_PER_WEEK = 7
MONTHS_PER_QUARTER = 3

ISO_WEEKDAYS: dict[int, relativedelta_weekday] = {
    1: MO,
    2: TU,
    3: WE,
    4: TH,
    5: FR,
    6: SA,
    7: SU,
}


def _week_number(day_index: int, iso_weekday: int) -> int:
    """Return the week number of a 1-based day within a month or year.

    The offset of the first Monday is derived from the day and its weekday,
    then widened to the previous Monday when enough days of that partial week
    fall within the period.
    """
    week_start = (day_index - iso_weekday) % DAYS_PER_WEEK
    offset = -week_start
    if week_start + 1 > MINIMAL_DAYS_IN_FIRST_WEEK:
        offset = DAYS_PER_WEEK - week_start
    return (DAYS_PER_WEEK + offset + (day_index - 1)) // DAYS_PER_WEEK


class CalendarProvider(ABC):
    """Date/time arithmetic primitives needed by the pattern search."""

    @abstractmethod
    def shift(
        self,
        value: datetime.datetime,
        *,
        years: int = 0,
        months: int = 0,
        days: int = 0,
        hours: int = 0,
        minutes: int = 0,
    ) -> datetime.datetime:
        """Return the date/time moved by a relative amount of time.

        Moving by months or years keeps the day of month, clamped to the
        last day of a shorter month.
        """

    @abstractmethod
    def with_fields(
        self,
        value: datetime.datetime,
        *,
        year: int | None = None,
        month: int | None = None,
        day: int | None = None,
        hour: int | None = None,
        minute: int | None = None,
    ) -> datetime.datetime:
        """Return the date/time with fields set to absolute values.

        Fields are applied in order from year to minute. Setting the year or
        month clamps the day of month, but a day of month that does not exist
        raises `InvalidCalendarValueError`.
        """

    @abstractmethod
    def iso_weekday(self, value: datetime.datetime) -> int:
        """Return the day of the week where Monday is 1 and Sunday is 7."""

    @abstractmethod
    def week_of_month(self, value: datetime.datetime) -> int:
        """Return the week number of the date within its month."""

    @abstractmethod
    def week_of_year(self, value: datetime.datetime) -> int:
        """Return the week number of the date within its year."""

    @abstractmethod
    def with_week_of_month(self, value: datetime.datetime, week: int) -> datetime.datetime:
        """Return the Monday of the specified week of the month."""

    @abstractmethod
    def with_week_of_year(self, value: datetime.datetime, week: int) -> datetime.datetime:
        """Return the Monday of the specified week of the year."""

    @abstractmethod
    def nth_weekday_of_month(
        self, value: datetime.datetime, ordinal: int, weekday: int
    ) -> datetime.datetime:
        """Return the nth occurrence of the weekday in the month of the value.

        This is lenient: when the month has no such occurrence, the result
        is in the following month.
        """

    @abstractmethod
    def next_weekday(
        self, value: datetime.datetime, weekday: int, *, inclusive: bool = False
    ) -> datetime.datetime:
        """Return the next occurrence of the weekday after the value.

        When `inclusive` is True, the value itself is returned if it already
        falls on the weekday.
        """

    @abstractmethod
    def previous_weekday(
        self, value: datetime.datetime, weekday: int, *, inclusive: bool = False
    ) -> datetime.datetime:
        """Return the previous occurrence of the weekday before the value.

        When `inclusive` is True, the value itself is returned if it already
        falls on the weekday.
        """

    def weekday_ordinal(self, value: datetime.datetime) -> int:
        """Return how many times the weekday of the value occurred in the month.

        The first seven days of a month are always the first occurrence of
        their weekday, whatever day of the week the month starts on.
        """
        return ((value.day - 1) // DAYS_PER_WEEK) + 1

    def quarter(self, value: datetime.datetime) -> int:
        """Return the quarter of the year between 1 and 4."""
        return ((value.month - 1) // MONTHS_PER_QUARTER) + 1

    def start_of_quarter(self, value: datetime.datetime, quarter: int) -> datetime.datetime:
        """Return midnight on the first day of the quarter in the year of the value."""
        start_of_year = self.with_fields(value, month=1, day=1, hour=0, minute=0)
        return self.shift(start_of_year, months=MONTHS_PER_QUARTER * (quarter - 1))


class IsoCalendar(CalendarProvider):
    """Proleptic Gregorian calendar provider using `dateutil.relativedelta`."""

    def shift(
        self,
        value: datetime.datetime,
        *,
        years: int = 0,
        months: int = 0,
        days: int = 0,
        hours: int = 0,
        minutes: int = 0,
    ) -> datetime.datetime:
        """Return the date/time moved by a relative amount of time."""
        try:
            return value + relativedelta(
                years=years, months=months, days=days, hours=hours, minutes=minutes
            )
        except (ValueError, OverflowError) as err:
            raise InvalidCalendarValueError(
                f"Unable to shift {value} (years={years}, months={months}, "
                f"days={days}, hours={hours}, minutes={minutes}): {err}"
            ) from err

    def with_fields(
        self,
        value: datetime.datetime,
        *,
        year: int | None = None,
        month: int | None = None,
        day: int | None = None,
        hour: int | None = None,
        minute: int | None = None,
    ) -> datetime.datetime:
        """Return the date/time with fields set to absolute values."""
        try:
            if year is not None:
                value = value + relativedelta(year=year)
            if month is not None:
                value = value + relativedelta(month=month)
        except ValueError as err:
            raise InvalidCalendarValueError(
                f"Unable to set year={year}, month={month} on {value}: {err}"
            ) from err
        updates = {
            key: field_value
            for key, field_value in (("day", day), ("hour", hour), ("minute", minute))
            if field_value is not None
        }
        if not updates:
            return value
        try:
            return value.replace(**updates)  # type: ignore[arg-type]
        except ValueError as err:
            raise InvalidCalendarValueError(
                f"Invalid calendar value {updates} for {value:%Y-%m}: {err}"
            ) from err

    def iso_weekday(self, value: datetime.datetime) -> int:
        """Return the day of the week where Monday is 1 and Sunday is 7."""
        return value.isoweekday()

    def week_of_month(self, value: datetime.datetime) -> int:
        """Return the week number of the date within its month."""
        return _week_number(value.day, value.isoweekday())

    def week_of_year(self, value: datetime.datetime) -> int:
        """Return the week number of the date within its year."""
        return _week_number(value.timetuple().tm_yday, value.isoweekday())

    def _weeks_in_month(self, value: datetime.datetime) -> int:
        return self.week_of_month(value + relativedelta(day=31))

    def _weeks_in_year(self, value: datetime.datetime) -> int:
        return self.week_of_year(value + relativedelta(month=12, day=31))

    def _move_to_week(
        self, value: datetime.datetime, current: int, week: int
    ) -> datetime.datetime:
        """Move by whole weeks to the target week then back to its Monday."""
        value = value + relativedelta(weeks=week - current)
        return value - relativedelta(days=value.isoweekday() - 1)

    def with_week_of_month(self, value: datetime.datetime, week: int) -> datetime.datetime:
        """Return the Monday of the specified week of the month."""
        num_weeks = self._weeks_in_month(value)
        if week < 1 or week > num_weeks:
            raise InvalidCalendarValueError(
                f"Week of month {week} does not exist in {value:%Y-%m} "
                f"which has {num_weeks} weeks"
            )
        return self._move_to_week(value, self.week_of_month(value), week)

    def with_week_of_year(self, value: datetime.datetime, week: int) -> datetime.datetime:
        """Return the Monday of the specified week of the year."""
        num_weeks = self._weeks_in_year(value)
        if week < 1 or week > num_weeks:
            raise InvalidCalendarValueError(
                f"Week of year {week} does not exist in {value:%Y} "
                f"which has {num_weeks} weeks"
            )
        return self._move_to_week(value, self.week_of_year(value), week)

    def nth_weekday_of_month(
        self, value: datetime.datetime, ordinal: int, weekday: int
    ) -> datetime.datetime:
        """Return the nth occurrence of the weekday in the month of the value."""
        return value + relativedelta(day=1, weekday=ISO_WEEKDAYS[weekday](+ordinal))

    def next_weekday(
        self, value: datetime.datetime, weekday: int, *, inclusive: bool = False
    ) -> datetime.datetime:
        """Return the next occurrence of the weekday after the value."""
        return value + relativedelta(
            days=0 if inclusive else 1, weekday=ISO_WEEKDAYS[weekday](+1)
        )

    def previous_weekday(
        self, value: datetime.datetime, weekday: int, *, inclusive: bool = False
    ) -> datetime.datetime:
        """Return the previous occurrence of the weekday before the value."""
        return value + relativedelta(
            days=0 if inclusive else -1, weekday=ISO_WEEKDAYS[weekday](-1)
        )
