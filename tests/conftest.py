"""Shared fixtures and fakes for the cyclops test suite."""

from __future__ import annotations

import subprocess
from pathlib import Path
from typing import Iterable, List, Optional

import pytest
from hypothesis import settings

settings.register_profile("cyclops", max_examples=200, deadline=None)
settings.load_profile("cyclops")


class ScriptedRandom:
    """Random stand-in whose randint() returns scripted draws in order."""

    def __init__(self, draws: Iterable[int]):
        self.draws = list(draws)
        self.calls: List[tuple] = []

    def randint(self, a: int, b: int) -> int:
        self.calls.append((a, b))
        value = self.draws.pop(0)
        assert a <= value <= b
        return value


class RecordingSink:
    """Commit sink that records calls and can fail on a chosen one."""

    def __init__(self, fail_on: Optional[tuple] = None, error: Optional[Exception] = None):
        self.calls: List[tuple] = []
        self.fail_on = fail_on
        self.error = error

    def record_activity(self, date, sequence: int) -> None:
        if self.fail_on is not None and (str(date), sequence) == self.fail_on:
            raise self.error
        self.calls.append((str(date), sequence))


class FakeGit:
    """subprocess.run replacement that records git invocations."""

    def __init__(self, fail_command: Optional[str] = None, missing_config: bool = True):
        self.commands: List[List[str]] = []
        self.envs: List[Optional[dict]] = []
        self.fail_command = fail_command
        self.missing_config = missing_config

    def __call__(self, command, cwd=None, env=None, capture_output=False, text=False, check=False):
        self.commands.append(list(command))
        self.envs.append(env)
        subcommand = command[1]
        if subcommand == self.fail_command:
            return subprocess.CompletedProcess(command, 1, "", f"fatal: {subcommand} failed")
        if subcommand == "init":
            (Path(cwd) / ".git").mkdir(parents=True, exist_ok=True)
        if subcommand == "config" and command[2] == "--get" and self.missing_config:
            return subprocess.CompletedProcess(command, 1, "", "")
        return subprocess.CompletedProcess(command, 0, "", "")

    def subcommands(self) -> List[str]:
        return [command[1] for command in self.commands]


@pytest.fixture
def fake_git() -> FakeGit:
    return FakeGit()
