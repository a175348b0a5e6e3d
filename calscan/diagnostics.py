"""Library for diagnostics or debugging information about pattern searches."""

from __future__ import annotations

import datetime
import logging

from .enumerator import MatchCallback
from .provider import CalendarProvider
from .settings import get_calendar_provider
from .types.component import Component, Direction
from .types.pattern import Pattern

__all__ = [
    "describe",
    "describe_datetime",
    "format_match",
    "logging_callback",
]

_LOGGER = logging.getLogger(__name__)

NOT_APPLICABLE = "N/A"
DATETIME_FORMAT = "%d.%m.%Y %H:%M"
INDENT = "    "


def _component_label(component: Component) -> str:
    return component.name.replace("_", " ").capitalize()


def describe(
    pattern: Pattern,
    origin: datetime.datetime | None = None,
    direction: Direction | None = None,
    max_matches: int | None = None,
) -> str:
    """Return a multi-line summary of a search with every pattern component.

    Wildcards are shown as N/A, including a weekday ordinal that is ignored
    because the weekday is not fixed.
    """
    lines = []
    if origin is not None:
        lines.append(f"Origin: {origin.strftime(DATETIME_FORMAT)}")
    if direction is not None:
        lines.append(f"Direction: {direction}")
    if max_matches is not None:
        lines.append(f"Max matches: {max_matches}")
    lines.append("Components:")
    for component in Component:
        if component is Component.WEEKDAY_ORDINAL:
            value = pattern.effective_weekday_ordinal
        else:
            value = pattern.get(component)
        display = NOT_APPLICABLE if value is None else str(value)
        lines.append(f"{INDENT}{_component_label(component)}: {display}")
    return "\n".join(lines)


def describe_datetime(
    value: datetime.datetime, provider: CalendarProvider | None = None
) -> str:
    """Return a date/time with the derived fields used for matching."""
    if provider is None:
        provider = get_calendar_provider()
    derived = {
        Component.WEEKDAY: provider.iso_weekday(value),
        Component.WEEKDAY_ORDINAL: provider.weekday_ordinal(value),
        Component.QUARTER: provider.quarter(value),
        Component.WEEK_OF_MONTH: provider.week_of_month(value),
        Component.WEEK_OF_YEAR: provider.week_of_year(value),
    }
    lines = [value.strftime(DATETIME_FORMAT)]
    lines.extend(
        f"{INDENT}{_component_label(component)}: {field_value}"
        for component, field_value in derived.items()
    )
    return "\n".join(lines)


def format_match(count: int, value: datetime.datetime) -> str:
    """Return a one line description of a match."""
    return f"Match#{count}: {value.strftime(DATETIME_FORMAT)}"


def logging_callback(logger: logging.Logger | None = None) -> MatchCallback:
    """Return a match callback that logs every match."""
    target = logger if logger is not None else _LOGGER

    def _log(count: int, value: datetime.datetime) -> None:
        target.info(format_match(count, value))

    return _log
