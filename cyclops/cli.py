"""Command-line entry point: ``cyclops <start_date> <end_date> <max_commits_per_day>``."""

import argparse
import logging
import random
import subprocess
import sys
import time
from pathlib import Path
from typing import List, Optional, TextIO

from cyclops.calendar import Date, parse
from cyclops.config import DEFAULT_DELAY, MAX_COMMITS_PER_DAY, MIN_COMMITS_PER_DAY, RunConfig, parse_max_commits
from cyclops.errors import ConfigError, CyclopsError, FormatError, RangeError, SinkError
from cyclops.schedule import DayRangeScheduler, ScheduleResult
from cyclops.sink import DEFAULT_LOG_FILE, ActivityLog, GitCommitSink, GitRepository, resolve_timezone

logger = logging.getLogger(__name__)

BANNER = """
   ██████╗██╗   ██╗ ██████╗██╗      ██████╗ ██████╗ ███████╗
  ██╔════╝╚██╗ ██╔╝██╔════╝██║     ██╔═══██╗██╔══██╗██╔════╝
  ██║      ╚████╔╝ ██║     ██║     ██║   ██║██████╔╝███████╗
  ██║       ╚██╔╝  ██║     ██║     ██║   ██║██╔═══╝ ╚════██║
  ╚██████╗   ██║   ╚██████╗███████╗╚██████╔╝██║     ███████║
   ╚═════╝   ╚═╝    ╚═════╝╚══════╝ ╚═════╝ ╚═╝     ╚══════╝

  Exposing the absurdity of GitHub-based hiring decisions
  Your coding ability shouldn't be judged by commit frequency
"""

USAGE = """Usage: {prog} <start_date> <end_date> <max_commits_per_day> [options]

Arguments:
  start_date           Start date in YYYY-MM-DD format
  end_date             End date in YYYY-MM-DD format
  max_commits_per_day  Maximum commits per day ({low}-{high}, 1-20 recommended)

Example:
  {prog} 2024-01-01 2024-12-31 5

Remember: This tool exists to highlight broken hiring practices.
The goal is to expose the system, not to encourage deception.
"""

START_NOTE = """If this can fool hiring algorithms, maybe the problem isn't
the candidates - it's the evaluation criteria.
"""

NEXT_STEPS = """
Your GitHub graph is now green. Does this make you a better developer?
Of course not. That's exactly the point.

Next steps:
1. Push to GitHub: git push -u origin main
2. Watch your contribution graph fill up
3. Remember: Green squares != Coding ability
4. Help fix the hiring process, don't just game it

The real solution is for the industry to evaluate developers based on:
- Problem-solving skills
- Code quality and architecture
- Collaboration and communication
- Learning ability and adaptability
- NOT GitHub activity patterns
"""


class UsageError(Exception):
    """Malformed invocation; answered with the usage text."""


class _ArgumentParser(argparse.ArgumentParser):
    def error(self, message: str) -> None:  # type: ignore[override]
        raise UsageError(message)


def build_parser(prog: str = "cyclops") -> argparse.ArgumentParser:
    parser = _ArgumentParser(
        prog=prog,
        description="Backfill a git history with randomised, backdated commits.",
    )
    parser.add_argument("start_date", help="start date, YYYY-MM-DD")
    parser.add_argument("end_date", help="end date, YYYY-MM-DD")
    parser.add_argument("max_commits_per_day", help=f"{MIN_COMMITS_PER_DAY}-{MAX_COMMITS_PER_DAY}")
    parser.add_argument("--repo", type=Path, default=Path("."), help="repository directory (default: .)")
    parser.add_argument("--log-file", default=DEFAULT_LOG_FILE, help="activity file inside the repository")
    parser.add_argument("--seed", type=int, default=None, help="random seed for a reproducible run")
    parser.add_argument("--delay", type=float, default=DEFAULT_DELAY, help="pause between days, in seconds")
    parser.add_argument("--timezone", default=None, help="IANA zone for commit timestamps (default: local)")
    parser.add_argument("--strict-dates", action="store_true", help="reject days beyond the month length")
    parser.add_argument("--no-banner", action="store_true", help="do not print the banner")
    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    verbosity.add_argument("-q", "--quiet", action="store_true", help="only log errors")
    return parser


def print_usage(prog: str, out: TextIO) -> None:
    print(BANNER, file=out)
    print(USAGE.format(prog=prog, low=MIN_COMMITS_PER_DAY, high=MAX_COMMITS_PER_DAY), file=out)


def parse_date_argument(label: str, text: str, strict: bool = False) -> Date:
    """Parse one date argument, naming it in the error message."""
    try:
        return parse(text, strict=strict)
    except (FormatError, RangeError) as exc:
        raise type(exc)(f"Invalid {label} date: {exc}") from exc


def config_from_args(args: argparse.Namespace) -> RunConfig:
    """Turn parsed arguments into a validated :class:`RunConfig`."""
    config = RunConfig(
        start=parse_date_argument("start", args.start_date, args.strict_dates),
        end=parse_date_argument("end", args.end_date, args.strict_dates),
        max_commits_per_day=parse_max_commits(args.max_commits_per_day),
        repo_path=args.repo,
        log_file=args.log_file,
        seed=args.seed,
        delay=args.delay,
        timezone=args.timezone,
    )
    config.validate()
    return config


def print_summary(result: ScheduleResult, out: TextIO) -> None:
    print("\nCyclops has exposed the system!", file=out)
    print("━" * 62, file=out)
    print(f"Days processed: {result.days_processed}", file=out)
    print(f"Total commits created: {result.total_commits}", file=out)
    if result.total_commits > 0:
        print(f"Average commits per active day: {result.average_per_active_day:.2f}", file=out)
    print(NEXT_STEPS, file=out)


def init_repository(config: RunConfig, runner=subprocess.run, out: Optional[TextIO] = None) -> GitRepository:
    """Make sure the target repository exists before any commit is scheduled."""
    out = out if out is not None else sys.stdout
    repo = GitRepository(config.repo_path, runner=runner)
    user_name, user_email = config.git_identity
    if repo.ensure_initialized(user_name, user_email):
        print("Initialized Git repository.", file=out)
    return repo


def run(config: RunConfig, runner=subprocess.run, out: Optional[TextIO] = None, sleep=time.sleep,
        repo: Optional[GitRepository] = None) -> ScheduleResult:
    """
    Execute a backfill run.

    Args:
        config: Validated run configuration
        runner: ``subprocess.run`` compatible callable used for git
        out: Stream for progress output
        sleep: Throttle function between days
        repo: Repository already prepared by :func:`init_repository`

    Returns:
        Counters for the completed run
    """
    out = out if out is not None else sys.stdout
    try:
        zone = resolve_timezone(config.timezone)
    except ValueError as exc:
        raise ConfigError(str(exc)) from exc

    seed = config.seed if config.seed is not None else time.time_ns()
    logger.debug("Random seed: %s", seed)
    rng = random.Random(seed)

    if repo is None:
        repo = init_repository(config, runner=runner, out=out)

    sink = GitCommitSink(repo, ActivityLog(config.log_path), rng=rng, work_hours=config.work_hours, zone=zone)

    def report_day(day: Date, commits: int) -> None:
        if commits > 0:
            print(f"Processing {day}: {commits} commits", file=out)

    scheduler = DayRangeScheduler(
        sink,
        config.max_commits_per_day,
        rng=rng,
        delay=config.delay,
        sleep=sleep,
        on_day=report_day,
    )
    return scheduler.run(config.start, config.end)


def main(argv: Optional[List[str]] = None, runner=subprocess.run,
         out: Optional[TextIO] = None, err: Optional[TextIO] = None) -> int:
    argv = sys.argv[1:] if argv is None else argv
    out = out if out is not None else sys.stdout
    err = err if err is not None else sys.stderr
    prog = "cyclops"
    parser = build_parser(prog)

    try:
        args = parser.parse_args(argv)
    except UsageError as exc:
        print_usage(prog, out)
        print(f"Error: {exc}", file=err)
        return 1

    level = logging.DEBUG if args.verbose else logging.ERROR if args.quiet else logging.WARNING
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")

    try:
        config = config_from_args(args)
        repo = init_repository(config, runner=runner, out=out)
    except CyclopsError as exc:
        print(f"Error: {exc}", file=err)
        return 1

    if not args.no_banner:
        print(BANNER, file=out)
    print("Generating GitHub activity to expose hiring algorithm flaws...", file=out)
    print(f"Date range: {config.start} to {config.end}", file=out)
    print(f"Max commits per day: {config.max_commits_per_day}\n", file=out)
    print(START_NOTE, file=out)

    try:
        result = run(config, runner=runner, out=out, repo=repo)
    except SinkError as exc:
        if exc.date is not None:
            print(f"Failed to create commit {exc.sequence} for {exc.date}", file=err)
        print(f"Error: {exc}", file=err)
        return 1
    except CyclopsError as exc:
        print(f"Error: {exc}", file=err)
        return 1

    print_summary(result, out)
    return 0
