"""Tests for diagnostics."""

from __future__ import annotations

import datetime
import logging

import pytest

from calscan.diagnostics import (
    describe,
    describe_datetime,
    format_match,
    logging_callback,
)
from calscan.enumerator import Enumerator
from calscan.types import Direction, Pattern

ORIGIN = datetime.datetime(2018, 9, 4, 11, 6)


def test_describe() -> None:
    """Test the summary of a search lists every component."""
    pattern = Pattern(month=9, weekday=1, weekday_ordinal=2, hour=1, minute=30)
    assert describe(pattern, ORIGIN, Direction.FORWARD, 3).split("\n") == [
        "Origin: 04.09.2018 11:06",
        "Direction: FORWARD",
        "Max matches: 3",
        "Components:",
        "    Year: N/A",
        "    Month: 9",
        "    Day: N/A",
        "    Hour: 1",
        "    Minute: 30",
        "    Weekday: 1",
        "    Weekday ordinal: 2",
        "    Quarter: N/A",
        "    Week of month: N/A",
        "    Week of year: N/A",
    ]


def test_describe_ignored_ordinal() -> None:
    """Test a weekday ordinal without a weekday is shown as not applicable."""
    lines = describe(Pattern(weekday_ordinal=2)).split("\n")
    assert lines[0] == "Components:"
    assert "    Weekday ordinal: N/A" in lines


def test_describe_datetime() -> None:
    """Test a date/time is shown with the fields derived from it."""
    assert describe_datetime(datetime.datetime(2018, 9, 10, 0, 30)).split("\n") == [
        "10.09.2018 00:30",
        "    Weekday: 1",
        "    Weekday ordinal: 2",
        "    Quarter: 3",
        "    Week of month: 2",
        "    Week of year: 37",
    ]


def test_format_match() -> None:
    """Test the one line description of a match."""
    assert format_match(1, datetime.datetime(2019, 9, 4, 11, 6)) == (
        "Match#1: 04.09.2019 11:06"
    )


def test_logging_callback(caplog: pytest.LogCaptureFixture) -> None:
    """Test every match is logged when using the logging callback."""
    caplog.set_level(logging.INFO, logger="calscan.diagnostics")
    enumerator = Enumerator(
        ORIGIN,
        Direction.FORWARD,
        {"month": 9, "day": 4, "hour": 11, "minute": 6},
        2,
        callback=logging_callback(),
    )
    assert enumerator.enumerate() == 2
    messages = [
        record.getMessage()
        for record in caplog.records
        if record.name == "calscan.diagnostics"
    ]
    assert messages == ["Match#1: 04.09.2018 11:06", "Match#2: 04.09.2019 11:06"]


def test_logging_callback_custom_logger(caplog: pytest.LogCaptureFixture) -> None:
    """Test matches are logged to the logger provided."""
    logger = logging.getLogger("tests.matches")
    caplog.set_level(logging.INFO, logger="tests.matches")
    callback = logging_callback(logger)
    callback(7, ORIGIN)
    assert [(record.name, record.getMessage()) for record in caplog.records] == [
        ("tests.matches", "Match#7: 04.09.2018 11:06")
    ]
