"""Utility methods used by multiple components."""

from __future__ import annotations

import datetime

__all__ = [
    "origin_factory",
    "truncate_to_minute",
]


def truncate_to_minute(value: datetime.datetime) -> datetime.datetime:
    """Drop the seconds and microseconds that are not used for matching."""
    return value.replace(second=0, microsecond=0)


def origin_factory() -> datetime.datetime:
    """Factory method for the default search origin to facilitate mocking."""
    return truncate_to_minute(datetime.datetime.now())
