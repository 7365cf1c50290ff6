"""
Git-backed commit sink.

Each unit of activity appends to the activity log, stages it and commits it
with author and committer dates set to a working-hours time on the scheduled
day.
"""

from __future__ import annotations

import logging
import os
import random
import subprocess
from datetime import datetime, tzinfo
from pathlib import Path
from typing import Callable, Dict, List, Optional, Tuple, Union

from dateutil import tz as dateutil_tz
from dateutil.relativedelta import relativedelta

from cyclops.calendar import Date
from cyclops.errors import GitCommandError, SinkError

from .activity_log import ActivityLog
from .messages import choose_message

logger = logging.getLogger(__name__)

GIT_DATE_FMT = "%Y-%m-%dT%H:%M:%S%z"
DEFAULT_WORK_HOURS = (8, 22)

Runner = Callable[..., "subprocess.CompletedProcess[str]"]


def resolve_timezone(name: Optional[str] = None) -> tzinfo:
    """Return the named IANA zone, or the local zone when ``name`` is empty."""
    if not name:
        return dateutil_tz.tzlocal()
    zone = dateutil_tz.gettz(name)
    if zone is None:
        raise ValueError(f"Unknown time zone: {name}")
    return zone


def commit_timestamp(date: Date, hour: int, minute: int, zone: Optional[tzinfo] = None) -> datetime:
    """
    Build the aware timestamp of a commit on ``date`` at ``hour:minute``.

    A day past the end of its month (``2024-02-31``) rolls forward into the
    next month (``2024-03-02``), the way git reads such a date.
    """
    first = datetime(date.year, date.month, 1, hour, minute)
    stamp = first + relativedelta(days=date.day - 1)
    return stamp.replace(tzinfo=zone if zone is not None else dateutil_tz.tzlocal())


class GitRepository:
    """Thin wrapper around the git executable for one working tree."""

    def __init__(self, path: Union[str, Path] = ".", git: str = "git", runner: Runner = subprocess.run):
        self.path = Path(path)
        self.git = git
        self.runner = runner

    def exists(self) -> bool:
        return (self.path / ".git").exists()

    def run(self, *args: str, env: Optional[Dict[str, str]] = None) -> "subprocess.CompletedProcess[str]":
        """Run a git subcommand in the working tree, raising on failure."""
        command: List[str] = [self.git, *args]
        logger.debug("Running %s", " ".join(command))
        try:
            completed = self.runner(
                command,
                cwd=str(self.path),
                env=env,
                capture_output=True,
                text=True,
                check=False,
            )
        except OSError as exc:
            raise GitCommandError(command, 127, str(exc)) from exc
        if completed.returncode != 0:
            raise GitCommandError(command, completed.returncode, completed.stderr or "")
        return completed

    def ensure_initialized(self, user_name: Optional[str] = None, user_email: Optional[str] = None) -> bool:
        """
        Create the repository if ``.git`` is missing.

        The identity is only configured on a fresh repository and only for
        keys that are not already set; failures there are logged and ignored.

        Returns:
            True if ``git init`` was run, False if the repository existed
        """
        if self.exists():
            logger.debug("Git repository already present at %s", self.path)
            return False

        logger.info("Initializing Git repository in %s", self.path)
        try:
            self.path.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise SinkError(f"Cannot create repository directory {self.path}: {exc}") from exc
        self.run("init")

        for key, value in (("user.name", user_name), ("user.email", user_email)):
            if not value or self._has_config(key):
                continue
            try:
                self.run("config", key, value)
            except GitCommandError as exc:
                logger.warning("Could not set git %s: %s", key, exc)
        return True

    def _has_config(self, key: str) -> bool:
        try:
            self.run("config", "--get", key)
        except GitCommandError:
            return False
        return True

    def add(self, *paths: Union[str, Path]) -> None:
        self.run("add", *(str(p) for p in paths))

    def commit(self, message: str, when: datetime) -> None:
        """Commit staged changes with author and committer dates set to ``when``."""
        stamp = when.strftime(GIT_DATE_FMT)
        env = dict(os.environ)
        env["GIT_AUTHOR_DATE"] = stamp
        env["GIT_COMMITTER_DATE"] = stamp
        self.run("commit", f"--date={stamp}", "-m", message, env=env)


class GitCommitSink:
    """Commit sink creating one backdated git commit per unit of activity."""

    def __init__(
        self,
        repo: GitRepository,
        log: ActivityLog,
        rng: Optional[random.Random] = None,
        work_hours: Tuple[int, int] = DEFAULT_WORK_HOURS,
        zone: Optional[tzinfo] = None,
    ):
        start_hour, end_hour = work_hours
        if not 0 <= start_hour < end_hour <= 24:
            raise ValueError(f"Invalid work hours window: {work_hours}")
        self.repo = repo
        self.log = log
        self.rng = rng if rng is not None else random.Random()
        self.work_hours = work_hours
        self.zone = zone

    def _timestamp(self, date: Date) -> datetime:
        start_hour, end_hour = self.work_hours
        hour = self.rng.randrange(start_hour, end_hour)
        minute = self.rng.randrange(60)
        return commit_timestamp(date, hour, minute, self.zone)

    def record_activity(self, date: Date, sequence: int) -> None:
        when = self._timestamp(date)
        self.log.append(date, sequence, self.rng)
        self.repo.add(self._log_path())
        message = choose_message(self.rng)
        self.repo.commit(message, when)
        logger.debug("Committed %s #%s at %s: %s", date, sequence, when.isoformat(), message)

    def _log_path(self) -> Path:
        # git add resolves paths against the working tree
        try:
            return self.log.path.resolve().relative_to(self.repo.path.resolve())
        except ValueError:
            return self.log.path.resolve()
