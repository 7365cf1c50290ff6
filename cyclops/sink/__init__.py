"""Commit sinks: the collaborators that turn scheduled activity into commits."""

from .activity_log import DEFAULT_LOG_FILE, ActivityLog, format_record
from .base import CommitSink
from .git import GitCommitSink, GitRepository, commit_timestamp, resolve_timezone
from .messages import COMMIT_MESSAGES, choose_message

__all__ = [
    "CommitSink",
    "ActivityLog",
    "DEFAULT_LOG_FILE",
    "format_record",
    "GitRepository",
    "GitCommitSink",
    "commit_timestamp",
    "resolve_timezone",
    "COMMIT_MESSAGES",
    "choose_message",
]
