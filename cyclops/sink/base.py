"""
Base abstraction for commit sinks.

The scheduler only knows this protocol, so it stays independent of how a
unit of activity is turned into a commit.
"""

from typing import Protocol, runtime_checkable

from cyclops.calendar import Date


@runtime_checkable
class CommitSink(Protocol):
    """
    Protocol for anything that records one unit of synthetic activity.
    """

    def record_activity(self, date: Date, sequence: int) -> None:
        """
        Record one commit on ``date``.

        Args:
            date: Day the commit is backdated to
            sequence: 1-based number of the commit within that day

        Raises:
            SinkError: The commit could not be created
        """
        ...
