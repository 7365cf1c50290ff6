"""Calendar arithmetic on a plain (year, month, day) value type.

The engine does not lean on :class:`datetime.date` because lax parsing lets
through days that do not exist in the month (``2024-02-31``); ``increment``
always rolls such a day forward onto a real calendar day.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from datetime import date as _date
from typing import Iterator

from cyclops.errors import FormatError, OrderError, RangeError

logger = logging.getLogger(__name__)

MIN_YEAR = 1900
MAX_YEAR = 2100

_DATE_PATTERN = re.compile(r"^\s*(\d+)-(\d+)-(\d+)\s*$")
_DAYS_IN_MONTH = (31, 28, 31, 30, 31, 30, 31, 31, 30, 31, 30, 31)


@dataclass(frozen=True, order=True)
class Date:
    """A calendar day, ordered lexicographically by (year, month, day)."""

    year: int
    month: int
    day: int

    def __str__(self) -> str:
        return f"{self.year:04d}-{self.month:02d}-{self.day:02d}"

    @property
    def is_valid(self) -> bool:
        """True if the day exists in its month and year."""
        return 1 <= self.month <= 12 and 1 <= self.day <= days_in_month(self.month, self.year)

    def to_date(self) -> _date:
        """Convert to :class:`datetime.date`; raises ValueError for overflow days."""
        return _date(self.year, self.month, self.day)

    @classmethod
    def from_date(cls, value: _date) -> "Date":
        return cls(value.year, value.month, value.day)


def is_leap_year(year: int) -> bool:
    """Gregorian leap year rule."""
    return (year % 4 == 0 and year % 100 != 0) or year % 400 == 0


def days_in_month(month: int, year: int) -> int:
    """Number of days in ``month`` of ``year``."""
    if not 1 <= month <= 12:
        raise RangeError(f"month must be between 1 and 12, got {month}")
    if month == 2 and is_leap_year(year):
        return 29
    return _DAYS_IN_MONTH[month - 1]


def parse(text: str, strict: bool = False) -> Date:
    """
    Parse a ``YYYY-MM-DD`` string into a :class:`Date`.

    Args:
        text: Date string, three hyphen-separated integers
        strict: Also reject days beyond the length of the month. By default
            the day is only checked against 1-31, so ``2024-02-31`` parses.

    Returns:
        Parsed date

    Raises:
        FormatError: The string is not three hyphen-separated integers
        RangeError: A component is outside the accepted bounds
    """
    match = _DATE_PATTERN.match(text) if isinstance(text, str) else None
    if match is None:
        raise FormatError(f"Invalid date format: {text!r}. Use YYYY-MM-DD")

    year, month, day = (int(part) for part in match.groups())
    if not MIN_YEAR <= year <= MAX_YEAR:
        raise RangeError(f"year must be between {MIN_YEAR} and {MAX_YEAR}, got {year}")
    if not 1 <= month <= 12:
        raise RangeError(f"month must be between 1 and 12, got {month}")
    if not 1 <= day <= 31:
        raise RangeError(f"day must be between 1 and 31, got {day}")

    if strict:
        limit = days_in_month(month, year)
        if day > limit:
            raise RangeError(f"day must be between 1 and {limit} for {year:04d}-{month:02d}, got {day}")
    elif day > days_in_month(month, year):
        logger.debug("Accepting overflow day %s without month-length check", text.strip())

    return Date(year, month, day)


def increment(value: Date) -> Date:
    """Return the day after ``value``, rolling over month and year ends."""
    year, month, day = value.year, value.month, value.day + 1
    if day > days_in_month(month, year):
        day = 1
        month += 1
        if month > 12:
            month = 1
            year += 1
    return Date(year, month, day)


def compare(a: Date, b: Date) -> int:
    """Three-way comparison: -1 if a < b, 0 if equal, 1 if a > b."""
    left = (a.year, a.month, a.day)
    right = (b.year, b.month, b.day)
    if left < right:
        return -1
    if left > right:
        return 1
    return 0


def validate_range(start: Date, end: Date) -> None:
    """Ensure ``start`` is not after ``end``."""
    if compare(start, end) > 0:
        raise OrderError(f"Start date {start} must be before or equal to end date {end}")


def iter_days(start: Date, end: Date) -> Iterator[Date]:
    """Yield every day from ``start`` to ``end`` inclusive."""
    cursor = start
    while compare(cursor, end) <= 0:
        yield cursor
        cursor = increment(cursor)


def day_count(start: Date, end: Date) -> int:
    """Inclusive number of days between ``start`` and ``end`` (0 if reversed)."""
    return sum(1 for _ in iter_days(start, end))
