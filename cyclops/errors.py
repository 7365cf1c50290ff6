"""Exception hierarchy shared by the calendar, scheduler and sink layers."""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional, Sequence

if TYPE_CHECKING:
    from cyclops.calendar import Date
    from cyclops.schedule import ScheduleResult


class CyclopsError(Exception):
    """Base class for every fatal error raised by cyclops."""


class FormatError(CyclopsError, ValueError):
    """Raised when a date string does not match ``YYYY-MM-DD``."""


class RangeError(CyclopsError, ValueError):
    """Raised when parsed date components fall outside the accepted bounds."""


class OrderError(CyclopsError, ValueError):
    """Raised when the start of a day-range is after its end."""


class ConfigError(CyclopsError, ValueError):
    """Raised for invalid run options such as the commits-per-day bound."""


class SinkError(CyclopsError, RuntimeError):
    """Raised when the commit sink fails to record one unit of activity.

    ``date`` and ``sequence`` identify the failing commit once known;
    the scheduler fills in ``partial`` with the counters of the days that
    completed before the failure.
    """

    def __init__(
        self,
        message: str,
        date: Optional["Date"] = None,
        sequence: Optional[int] = None,
        partial: Optional["ScheduleResult"] = None,
    ):
        super().__init__(message)
        self.date = date
        self.sequence = sequence
        self.partial = partial


class GitCommandError(SinkError):
    """Raised when a git subprocess exits non-zero or cannot be started."""

    def __init__(self, command: Sequence[str], returncode: int, stderr: str = ""):
        self.command = list(command)
        self.returncode = returncode
        self.stderr = stderr.strip()
        message = f"git command failed ({returncode}): {' '.join(self.command)}"
        if self.stderr:
            message = f"{message}: {self.stderr}"
        super().__init__(message)
