"""Test fixtures."""

from __future__ import annotations

from collections import Counter
import datetime
from typing import Any

import pytest

from calscan.provider import IsoCalendar


class CountingCalendar(IsoCalendar):
    """Calendar provider that records how often each primitive is used."""

    def __init__(self) -> None:
        self.calls: Counter[str] = Counter()

    def shift(self, value: datetime.datetime, **kwargs: Any) -> datetime.datetime:
        self.calls["shift"] += 1
        return super().shift(value, **kwargs)

    def with_fields(self, value: datetime.datetime, **kwargs: Any) -> datetime.datetime:
        self.calls["with_fields"] += 1
        return super().with_fields(value, **kwargs)


@pytest.fixture(name="provider")
def mock_provider() -> CountingCalendar:
    """Fixture to create a calendar provider that counts calls."""
    return CountingCalendar()
