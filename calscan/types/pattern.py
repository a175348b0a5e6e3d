"""Implementation of the pattern of fixed fields used for matching.

A pattern is a sparse set of integer constraints over the fields of a
date/time. Any field left unset is a wildcard. For example, this is the
pattern for every Monday of September 2018 at minute 30 of each hour:

```python
from calscan.types import Pattern

pattern = Pattern(year=2018, month=9, minute=30, weekday=1)
```

Patterns can also be created from a mapping of components, which is the
form used by the enumerator:

```python
from calscan.types import Component, Pattern

pattern = Pattern.from_components({Component.MONTH: 9, "weekday": 1})
```

Each field is checked against the range of values it can take, but fields
are not checked against each other: `Pattern(month=2, day=31)` is a valid
pattern that fails when a date is built from it.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from .component import Component

__all__ = ["Pattern"]


class Pattern(BaseModel):
    """An immutable set of optional constraints over date/time fields."""

    year: Optional[int] = None

    month: Optional[int] = Field(default=None, ge=1, le=12)

    day: Optional[int] = Field(default=None, ge=1, le=31)
    """Day of the month."""

    hour: Optional[int] = Field(default=None, ge=0, le=23)

    minute: Optional[int] = Field(default=None, ge=0, le=59)

    weekday: Optional[int] = Field(default=None, ge=1, le=7)
    """ISO day of the week where Monday is 1 and Sunday is 7."""

    weekday_ordinal: Optional[int] = Field(
        alias="weekdayOrdinal", default=None, ge=1, le=5
    )
    """The nth occurrence of the weekday in the month e.g. 2 for 2nd Monday.

    This value is ignored when `weekday` is not set.
    """

    quarter: Optional[int] = Field(default=None, ge=1, le=4)

    week_of_month: Optional[int] = Field(
        alias="weekOfMonth", default=None, ge=1, le=6
    )
    """Week of the month, weeks starting on Monday.

    This value is ignored when `week_of_year` is set.
    """

    week_of_year: Optional[int] = Field(alias="weekOfYear", default=None, ge=1, le=53)
    """Week of the year, weeks starting on Monday."""

    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
    )

    @classmethod
    def from_components(
        cls, components: Mapping[Component | str, int] | None = None
    ) -> Pattern:
        """Create a Pattern from a mapping of components to fixed values."""
        values: dict[str, int] = {}
        for key, value in (components or {}).items():
            values[Component.parse(key).value] = value
        return cls.model_validate(values)

    def get(self, component: Component) -> int | None:
        """Return the fixed value of the component or None for a wildcard."""
        return getattr(self, component.value)  # type: ignore[no-any-return]

    def is_fixed(self, component: Component) -> bool:
        """Return True if the component is constrained by this pattern."""
        return self.get(component) is not None

    def components(self) -> dict[Component, int]:
        """Return the fixed components of the pattern."""
        return {
            component: value
            for component in Component
            if (value := self.get(component)) is not None
        }

    @property
    def effective_weekday_ordinal(self) -> int | None:
        """Return the weekday ordinal if it takes part in matching."""
        if self.weekday is None:
            return None
        return self.weekday_ordinal

    @property
    def effective_week_of_month(self) -> int | None:
        """Return the week of month if it takes part in matching."""
        if self.week_of_year is not None:
            return None
        return self.week_of_month

    def __str__(self) -> str:
        """Return a compact representation of the fixed components."""
        return ";".join(
            f"{component.name}={value}" for component, value in self.components().items()
        )
