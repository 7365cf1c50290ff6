"""
Run configuration and defaults.
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Tuple

from cyclops.calendar import Date, validate_range
from cyclops.errors import ConfigError
from cyclops.sink.activity_log import DEFAULT_LOG_FILE
from cyclops.sink.git import DEFAULT_WORK_HOURS, resolve_timezone

MIN_COMMITS_PER_DAY = 1
MAX_COMMITS_PER_DAY = 50

# Throttle between days so git is not hammered
DEFAULT_DELAY = 0.005

DEFAULT_GIT_NAME = "Cyclops"
DEFAULT_GIT_EMAIL = "cyclops@github.com"


def default_git_identity() -> Tuple[str, str]:
    """Identity for a freshly initialised repository, overridable from the environment."""
    return (
        os.environ.get("CYCLOPS_GIT_NAME", DEFAULT_GIT_NAME),
        os.environ.get("CYCLOPS_GIT_EMAIL", DEFAULT_GIT_EMAIL),
    )


def parse_max_commits(value: str) -> int:
    """Parse and bound-check the commits-per-day argument."""
    try:
        count = int(str(value).strip())
    except ValueError as exc:
        raise ConfigError(f"max_commits_per_day must be an integer, got {value!r}") from exc
    if not MIN_COMMITS_PER_DAY <= count <= MAX_COMMITS_PER_DAY:
        raise ConfigError(
            f"max_commits_per_day must be between {MIN_COMMITS_PER_DAY} and {MAX_COMMITS_PER_DAY}"
        )
    return count


@dataclass(frozen=True)
class RunConfig:
    """Everything a single backfill run needs."""

    start: Date
    end: Date
    max_commits_per_day: int
    repo_path: Path = Path(".")
    log_file: str = DEFAULT_LOG_FILE
    seed: Optional[int] = None
    delay: float = DEFAULT_DELAY
    timezone: Optional[str] = None
    work_hours: Tuple[int, int] = DEFAULT_WORK_HOURS
    git_identity: Tuple[str, str] = field(default_factory=default_git_identity)

    @property
    def log_path(self) -> Path:
        return self.repo_path / self.log_file

    def validate(self) -> None:
        """Raise OrderError or ConfigError for an unusable configuration."""
        validate_range(self.start, self.end)
        if not MIN_COMMITS_PER_DAY <= self.max_commits_per_day <= MAX_COMMITS_PER_DAY:
            raise ConfigError(
                f"max_commits_per_day must be between {MIN_COMMITS_PER_DAY} and {MAX_COMMITS_PER_DAY}"
            )
        if self.delay < 0:
            raise ConfigError(f"delay must be non-negative, got {self.delay}")
        if not self.log_file or Path(self.log_file).name != self.log_file:
            raise ConfigError(f"log file must be a plain file name, got {self.log_file!r}")
        start_hour, end_hour = self.work_hours
        if not 0 <= start_hour < end_hour <= 24:
            raise ConfigError(f"Invalid work hours window: {self.work_hours}")
        if self.timezone:
            try:
                resolve_timezone(self.timezone)
            except ValueError as exc:
                raise ConfigError(str(exc)) from exc
