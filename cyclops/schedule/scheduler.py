"""
Day-range scheduling logic.

Walks a date cursor from start to end inclusive, draws a random number of
commits for each day and hands every unit of work to a commit sink.
"""

import logging
import random
import time
from typing import Callable, Optional

from cyclops.calendar import Date, compare, increment, validate_range
from cyclops.errors import ConfigError, SinkError
from cyclops.sink.base import CommitSink

from .core import ScheduleResult

logger = logging.getLogger(__name__)

DayCallback = Callable[[Date, int], None]


class DayRangeScheduler:
    """Drives a commit sink across an inclusive range of days."""

    def __init__(
        self,
        sink: CommitSink,
        max_commits_per_day: int,
        rng: Optional[random.Random] = None,
        delay: float = 0.0,
        sleep: Callable[[float], None] = time.sleep,
        on_day: Optional[DayCallback] = None,
    ):
        if max_commits_per_day < 0:
            raise ConfigError(f"max_commits_per_day must be non-negative, got {max_commits_per_day}")
        if delay < 0:
            raise ConfigError(f"delay must be non-negative, got {delay}")
        self.sink = sink
        self.max_commits_per_day = max_commits_per_day
        self.rng = rng if rng is not None else random.Random()
        self.delay = delay
        self.sleep = sleep
        self.on_day = on_day

    def draw_commits(self) -> int:
        """Number of commits for one day, uniform over 0..max inclusive."""
        return self.rng.randint(0, self.max_commits_per_day)

    def run(self, start: Date, end: Date) -> ScheduleResult:
        """
        Schedule commits for every day from ``start`` to ``end`` inclusive.

        Args:
            start: First day of the range
            end: Last day of the range, not before ``start``

        Returns:
            Counters for the completed run

        Raises:
            OrderError: ``start`` is after ``end``
            SinkError: The sink failed; ``partial`` holds the days completed
                before the failing one
        """
        validate_range(start, end)

        result = ScheduleResult()
        cursor = start
        while compare(cursor, end) <= 0:
            commits_today = self.draw_commits()
            if self.on_day is not None:
                self.on_day(cursor, commits_today)

            if commits_today > 0:
                logger.info("Processing %s: %s commits", cursor, commits_today)
                for sequence in range(1, commits_today + 1):
                    self._record(cursor, sequence, result)
            else:
                logger.debug("No activity on %s", cursor)

            result.record_day(commits_today)
            cursor = increment(cursor)

            if self.delay > 0:
                self.sleep(self.delay)

        logger.info(
            "Scheduled %s commits over %s days (%s active)",
            result.total_commits, result.days_processed, result.active_days,
        )
        return result

    def _record(self, day: Date, sequence: int, result: ScheduleResult) -> None:
        try:
            self.sink.record_activity(day, sequence)
        except SinkError as exc:
            exc.date = day
            exc.sequence = sequence
            exc.partial = result
            logger.error("Failed to create commit %s for %s: %s", sequence, day, exc)
            raise
        except Exception as exc:
            logger.error("Failed to create commit %s for %s: %s", sequence, day, exc)
            raise SinkError(
                f"Failed to create commit {sequence} for {day}: {exc}",
                date=day, sequence=sequence, partial=result,
            ) from exc
