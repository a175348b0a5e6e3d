"""A library for finding the date/times that match a sparse calendar pattern.

A pattern fixes any of the year, month, day, hour, minute, weekday,
weekday ordinal, quarter, week of month and week of year. Starting from an
origin, the `calscan.enumerator.Enumerator` scans forward or backward in
time and reports each matching date/time in order:

```python
import datetime

from calscan.enumerator import occurrences
from calscan.types import Direction

occurrences(
    datetime.datetime(2018, 9, 4, 11, 6),
    Direction.FORWARD,
    {"month": 9, "weekday": 1, "weekday_ordinal": 2, "hour": 1, "minute": 30},
    max_matches=3,
)
```

Returns the second Monday of September at 01:30 for 2018, 2019 and 2020.
"""

__all__ = [
    "anchor",
    "diagnostics",
    "enumerator",
    "exceptions",
    "predicate",
    "provider",
    "settings",
    "types",
    "util",
]
