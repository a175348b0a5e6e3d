"""Enumerations describing the fields of a pattern and the scan direction."""

from __future__ import annotations

import datetime
import enum

__all__ = ["Component", "Direction"]


class Component(str, enum.Enum):
    """A field of a date/time that a pattern may fix to a value."""

    YEAR = "year"
    MONTH = "month"
    DAY = "day"
    HOUR = "hour"
    MINUTE = "minute"

    WEEKDAY = "weekday"
    """ISO day of the week, Monday is 1 and Sunday is 7."""

    WEEKDAY_ORDINAL = "weekday_ordinal"
    """The nth occurrence of the weekday within its month.

    Only meaningful when `WEEKDAY` is also fixed.
    """

    QUARTER = "quarter"

    WEEK_OF_MONTH = "week_of_month"
    """Week number within the month, ignored when `WEEK_OF_YEAR` is fixed."""

    WEEK_OF_YEAR = "week_of_year"

    def __str__(self) -> str:
        """Return string representation."""
        return self.value

    @classmethod
    def parse(cls, value: Component | str) -> Component:
        """Return the component for a value or a member name."""
        if isinstance(value, Component):
            return value
        if not isinstance(value, str):
            raise ValueError(f"Expected pattern component name: {value!r}")
        try:
            return cls(value)
        except ValueError:
            pass
        try:
            return cls[value.upper()]
        except KeyError as err:
            raise ValueError(f"Unknown pattern component: {value}") from err


class Direction(str, enum.Enum):
    """Direction of the scan relative to the origin."""

    FORWARD = "FORWARD"
    """Matching date/times in the future."""

    BACKWARD = "BACKWARD"
    """Matching date/times in the past."""

    def __str__(self) -> str:
        """Return string representation."""
        return self.value

    @property
    def sign(self) -> int:
        """Return the unit step used to move in this direction."""
        return 1 if self is Direction.FORWARD else -1

    def is_beyond(
        self, candidate: datetime.datetime, reference: datetime.datetime
    ) -> bool:
        """Return True if candidate is strictly past reference in this direction."""
        if self is Direction.FORWARD:
            return candidate > reference
        return candidate < reference
