"""Library for enumerating the date/times that match a pattern.

The enumerator walks time from the anchor in the scan direction, one level
of granularity at a time, reporting every date/time that satisfies the
pattern to a callback. For example, the first two occurrences of the 4th of
September at 11:06 starting from that moment:

```python
import datetime

from calscan.enumerator import Enumerator
from calscan.types import Component, Direction

enumerator = Enumerator(
    datetime.datetime(2018, 9, 4, 11, 6),
    Direction.FORWARD,
    {
        Component.MONTH: 9,
        Component.DAY: 4,
        Component.HOUR: 11,
        Component.MINUTE: 6,
    },
    max_matches=2,
    callback=lambda count, value: print(count, value),
)
enumerator.enumerate()
```

The above example will output:
```
1 2018-09-04 11:06:00
2 2019-09-04 11:06:00
```

The search has five levels, from finest to coarsest: minute, hour, day (or
weekday), month and year. A level whose field is fixed in the pattern does
not step on its own and defers to the next coarser level. A free level
moves the current candidate by one of its units, resetting the finer fields
to their fixed values (or their first value). When the result matches it
is reported and the search restarts from the finest level, since a coarse
step may contain many finer matches. When it does not match the search
escalates to the next coarser level.

The year is the last level: a single year step that does not match ends
the search. This bounds the amount of work for rare or contradictory
patterns, at the cost of missing occurrences that may exist further away.
"""

from __future__ import annotations

import datetime
import enum
import logging
from collections.abc import Callable, Mapping

from .anchor import place_in_cycle, reset_time_of_day, resolve_anchor
from .predicate import matches
from .provider import CalendarProvider
from .settings import get_calendar_provider
from .types.component import Component, Direction
from .types.pattern import Pattern
from .util import origin_factory, truncate_to_minute

__all__ = [
    "Enumerator",
    "Level",
    "MatchCallback",
    "occurrences",
]

_LOGGER = logging.getLogger(__name__)

MatchCallback = Callable[[int, datetime.datetime], None]
"""A callback invoked with the 1-based sequence number and date/time of a match."""

_Step = Callable[[datetime.datetime], datetime.datetime]


class Level(enum.IntEnum):
    """Granularity levels of the search ordered from finest to coarsest."""

    MINUTE = 0
    HOUR = 1
    DAY_OR_WEEKDAY = 2
    MONTH = 3
    YEAR = 4


class Enumerator:
    """Enumerates the date/times matching a pattern from an origin."""

    def __init__(
        self,
        origin: datetime.datetime | None,
        direction: Direction | str,
        components: Pattern | Mapping[Component | str, int],
        max_matches: int,
        callback: MatchCallback | None = None,
        provider: CalendarProvider | None = None,
    ) -> None:
        """Initialize Enumerator and resolve the anchor of the search.

        The origin defaults to the current time. Raises `ValueError` when
        `max_matches` is not positive, and `InvalidCalendarValueError` when the
        fixed fields can't be applied to the origin.
        """
        if max_matches <= 0:
            raise ValueError(f"Expected max_matches to be positive: {max_matches}")
        self._origin = (
            truncate_to_minute(origin) if origin is not None else origin_factory()
        )
        self._direction = Direction(str(direction).upper())
        if isinstance(components, Pattern):
            self._pattern = components
        else:
            self._pattern = Pattern.from_components(components)
        self._max_matches = max_matches
        self._callback = callback
        self._provider = provider if provider is not None else get_calendar_provider()
        self._steps = self._level_steps()
        self._anchor = resolve_anchor(
            self._pattern, self._origin, self._direction, self._provider
        )
        self._current = self._anchor
        self._count = 0

    @property
    def origin(self) -> datetime.datetime:
        """Return the origin of the search."""
        return self._origin

    @property
    def direction(self) -> Direction:
        """Return the direction of the search."""
        return self._direction

    @property
    def pattern(self) -> Pattern:
        """Return the pattern to match."""
        return self._pattern

    @property
    def max_matches(self) -> int:
        """Return the maximum number of matches reported."""
        return self._max_matches

    @property
    def anchor(self) -> datetime.datetime:
        """Return the first candidate of the search."""
        return self._anchor

    def matches(self, value: datetime.datetime) -> bool:
        """Return True if the date/time satisfies the pattern."""
        return matches(self._pattern, value, self._provider)

    def is_fixed(self, level: Level) -> bool:
        """Return True if the level does not step on its own."""
        return self._steps[level] is None

    def trial(
        self, level: Level, candidate: datetime.datetime | None = None
    ) -> datetime.datetime | None:
        """Return the next candidate one unit of the level away.

        The candidate defaults to the anchor. Returns None for a fixed level.
        """
        if (step := self._steps[level]) is None:
            return None
        return step(candidate if candidate is not None else self._anchor)

    def enumerate(self) -> int:
        """Report matching date/times until the maximum or no more can be found.

        Each call starts over from the anchor. Returns the number of matches.
        """
        self._current = self._anchor
        self._count = 0

        anchor_in_range = self._anchor == self._origin or self._direction.is_beyond(
            self._anchor, self._origin
        )
        if anchor_in_range and self.matches(self._anchor):
            self._emit(self._anchor)

        level = Level.MINUTE
        while self._count < self._max_matches:
            if (step := self._steps[level]) is None:
                if level is Level.YEAR:
                    _LOGGER.debug("Fixed year has no candidates after %s", self._current)
                    break
                level = Level(level + 1)
                continue
            trial = step(self._current)
            if self._direction.is_beyond(trial, self._current) and self.matches(trial):
                self._emit(trial)
                level = Level.MINUTE
                continue
            if level is Level.YEAR:
                _LOGGER.debug("Next year candidate %s does not match", trial)
                break
            level = Level(level + 1)

        _LOGGER.debug(
            "Finished enumerating pattern '%s' with %d matches",
            self._pattern,
            self._count,
        )
        return self._count

    def _emit(self, value: datetime.datetime) -> None:
        self._current = value
        self._count += 1
        _LOGGER.debug("Match #%d: %s", self._count, value)
        if self._callback is not None:
            self._callback(self._count, value)

    def _level_steps(self) -> tuple[_Step | None, ...]:
        """Return the step for each level, or None for a fixed level."""
        pattern = self._pattern
        day_step: _Step | None = None
        if pattern.weekday is not None:
            if pattern.weekday_ordinal is not None:
                day_step = self._step_weekday_ordinal
            else:
                day_step = self._step_weekday
        elif pattern.day is None:
            day_step = self._step_day
        return (
            self._step_minute if pattern.minute is None else None,
            self._step_hour if pattern.hour is None else None,
            day_step,
            self._step_month if pattern.month is None else None,
            self._step_year if pattern.year is None else None,
        )

    def _step_minute(self, current: datetime.datetime) -> datetime.datetime:
        return self._provider.shift(current, minutes=self._direction.sign)

    def _step_hour(self, current: datetime.datetime) -> datetime.datetime:
        trial = self._provider.shift(current, hours=self._direction.sign)
        return self._provider.with_fields(
            trial, minute=self._pattern.minute if self._pattern.minute is not None else 0
        )

    def _step_day(self, current: datetime.datetime) -> datetime.datetime:
        trial = self._provider.shift(current, days=self._direction.sign)
        return reset_time_of_day(self._pattern, trial, self._provider)

    def _step_weekday(self, current: datetime.datetime) -> datetime.datetime:
        weekday = self._pattern.weekday
        assert weekday is not None
        if self._direction is Direction.FORWARD:
            trial = self._provider.next_weekday(current, weekday)
        else:
            trial = self._provider.previous_weekday(current, weekday)
        return reset_time_of_day(self._pattern, trial, self._provider)

    def _step_weekday_ordinal(self, current: datetime.datetime) -> datetime.datetime:
        weekday = self._pattern.weekday
        ordinal = self._pattern.weekday_ordinal
        assert weekday is not None and ordinal is not None
        trial = self._provider.nth_weekday_of_month(current, ordinal, weekday)
        while not self._direction.is_beyond(trial, current):
            trial = self._provider.nth_weekday_of_month(
                self._provider.shift(trial, months=self._direction.sign),
                ordinal,
                weekday,
            )
        return reset_time_of_day(self._pattern, trial, self._provider)

    def _step_month(self, current: datetime.datetime) -> datetime.datetime:
        trial = self._provider.shift(current, months=self._direction.sign)
        trial = self._provider.with_fields(
            trial, day=self._pattern.day if self._pattern.day is not None else 1
        )
        trial = reset_time_of_day(self._pattern, trial, self._provider)
        return place_in_cycle(
            self._pattern, trial, current, self._direction, self._provider
        )

    def _step_year(self, current: datetime.datetime) -> datetime.datetime:
        trial = self._provider.shift(current, years=self._direction.sign)
        trial = self._provider.with_fields(
            trial,
            month=self._pattern.month if self._pattern.month is not None else 1,
            day=self._pattern.day if self._pattern.day is not None else 1,
        )
        trial = reset_time_of_day(self._pattern, trial, self._provider)
        return place_in_cycle(
            self._pattern, trial, current, self._direction, self._provider
        )

    def __repr__(self) -> str:
        return (
            f"Enumerator(origin={self._origin}, direction={self._direction}, "
            f"pattern='{self._pattern}', max_matches={self._max_matches})"
        )


def occurrences(
    origin: datetime.datetime | None,
    direction: Direction | str,
    components: Pattern | Mapping[Component | str, int],
    max_matches: int,
    provider: CalendarProvider | None = None,
) -> list[datetime.datetime]:
    """Return the date/times matching the pattern in scan order."""
    results: list[datetime.datetime] = []

    def _collect(_: int, value: datetime.datetime) -> None:
        results.append(value)

    Enumerator(
        origin, direction, components, max_matches, _collect, provider
    ).enumerate()
    return results
