"""Exceptions for calscan library."""


class CalscanError(Exception):
    """Base exception for all calscan errors."""


class InvalidCalendarValueError(CalscanError, ValueError):
    """Exception raised when a fixed field has no calendar representation.

    The fields of a pattern are not checked against each other up front, so
    a combination such as `day=31` with `month=2`, or `week_of_year=53` in a
    year that only has 52 weeks, is only detected when the calendar provider
    is asked to build the date. This is a precondition violation by the
    caller and is never retried by the enumerator.
    """

