"""Runtime settings for pattern searches.

The calendar provider used when a search is not given one explicitly is
held in a context variable, so that a provider installed in one thread or
task does not leak into a search running somewhere else:

```python
from calscan import settings

with settings.use_calendar_provider(MyCalendar()):
    ...
```
"""

from __future__ import annotations

from collections.abc import Generator
import contextlib
import contextvars

from .provider import CalendarProvider, IsoCalendar

__all__ = [
    "use_calendar_provider",
    "get_calendar_provider",
]

_DEFAULT_PROVIDER = IsoCalendar()

_calendar_provider: contextvars.ContextVar[CalendarProvider | None] = (
    contextvars.ContextVar("calendar_provider", default=None)
)


@contextlib.contextmanager
def use_calendar_provider(provider: CalendarProvider) -> Generator[None]:
    """Context manager to use a calendar provider when none is given explicitly."""
    token = _calendar_provider.set(provider)
    try:
        yield
    finally:
        _calendar_provider.reset(token)


def get_calendar_provider() -> CalendarProvider:
    """Return the calendar provider in effect."""
    if (provider := _calendar_provider.get()) is not None:
        return provider
    return _DEFAULT_PROVIDER
