"""
Core data structures for day-range scheduling.
"""

from dataclasses import dataclass, field
from typing import List


@dataclass
class ScheduleResult:
    """Counters accumulated over a scheduling run."""

    days_processed: int = 0
    total_commits: int = 0
    active_days: int = 0
    daily_counts: List[int] = field(default_factory=list)

    def record_day(self, commits: int) -> None:
        """Account for one fully handled day."""
        self.days_processed += 1
        self.total_commits += commits
        if commits > 0:
            self.active_days += 1
        self.daily_counts.append(commits)

    @property
    def average_per_active_day(self) -> float:
        """Mean number of commits over days that had at least one."""
        if self.active_days == 0:
            return 0.0
        return self.total_commits / self.active_days
