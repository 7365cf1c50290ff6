"""Append-only log of synthetic development activity."""

from __future__ import annotations

import logging
import random
from pathlib import Path
from typing import Union

from cyclops.calendar import Date
from cyclops.errors import SinkError

logger = logging.getLogger(__name__)

DEFAULT_LOG_FILE = "cyclops_activity.txt"

SESSION_MINUTES = (30, 209)
LINES_CHANGED = (10, 109)
FOOTER = "/* Generated activity to demonstrate the meaninglessness of GitHub metrics */"


def format_record(date: Date, sequence: int, session_minutes: int, lines_changed: int) -> str:
    """Render one activity record, terminated by a blank line."""
    return (
        f"// Activity log: {date} #{sequence}\n"
        f"// Session: {session_minutes} minutes of development work\n"
        f"// Changes: {lines_changed} lines modified\n"
        f"{FOOTER}\n\n"
    )


class ActivityLog:
    """The file every synthetic commit touches."""

    def __init__(self, path: Union[str, Path] = DEFAULT_LOG_FILE):
        self.path = Path(path)

    def append(self, date: Date, sequence: int, rng: random.Random) -> str:
        """
        Append a record for ``date``/``sequence`` and return the written text.

        Raises:
            SinkError: The file could not be opened or written
        """
        record = format_record(
            date,
            sequence,
            session_minutes=rng.randint(*SESSION_MINUTES),
            lines_changed=rng.randint(*LINES_CHANGED),
        )
        try:
            with self.path.open("a", encoding="utf-8") as handle:
                handle.write(record)
        except OSError as exc:
            raise SinkError(f"Cannot open activity file {self.path}: {exc}") from exc
        logger.debug("Appended activity record %s #%s to %s", date, sequence, self.path)
        return record
