"""Cyclops: fills a contribution graph with backdated commits.

Key modules:
- calendar: date parsing, validation and day stepping
- schedule: the day-range scheduler and its run counters
- sink: activity log, commit messages and the git-backed commit sink
- cli: command-line entry point
"""

__version__ = "1.0.0"

__all__ = [
    "__version__",
    # Main modules are imported via subpackages
    "calendar",
    "schedule",
    "sink",
    "cli",
]
