"""Calendar engine: date parsing, validation, comparison and day stepping."""

from .date import (
    MAX_YEAR,
    MIN_YEAR,
    Date,
    compare,
    day_count,
    days_in_month,
    increment,
    is_leap_year,
    iter_days,
    parse,
    validate_range,
)

__all__ = [
    "Date",
    "MIN_YEAR",
    "MAX_YEAR",
    "parse",
    "is_leap_year",
    "days_in_month",
    "increment",
    "compare",
    "validate_range",
    "iter_days",
    "day_count",
]
