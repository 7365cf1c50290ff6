"""Tests for the day-range scheduler."""

from __future__ import annotations

import random
from datetime import date, timedelta

import pytest
from hypothesis import given
from hypothesis import strategies as st

from conftest import RecordingSink, ScriptedRandom
from cyclops.calendar import Date, day_count, parse
from cyclops.errors import ConfigError, OrderError, SinkError
from cyclops.schedule import DayRangeScheduler, ScheduleResult
from cyclops.sink import CommitSink


class TestScheduleScenario:
    def test_scripted_draws(self) -> None:
        sink = RecordingSink()
        rng = ScriptedRandom([2, 0, 4])
        scheduler = DayRangeScheduler(sink, 5, rng=rng)

        result = scheduler.run(parse("2024-01-01"), parse("2024-01-03"))

        assert sink.calls == [
            ("2024-01-01", 1),
            ("2024-01-01", 2),
            ("2024-01-03", 1),
            ("2024-01-03", 2),
            ("2024-01-03", 3),
            ("2024-01-03", 4),
        ]
        assert result.days_processed == 3
        assert result.total_commits == 6
        assert result.active_days == 2
        assert result.daily_counts == [2, 0, 4]
        assert rng.calls == [(0, 5)] * 3

    def test_single_day_range(self) -> None:
        sink = RecordingSink()
        result = DayRangeScheduler(sink, 3, rng=ScriptedRandom([1])).run(Date(2024, 6, 1), Date(2024, 6, 1))
        assert result.days_processed == 1
        assert sink.calls == [("2024-06-01", 1)]

    def test_crosses_leap_day_and_year_end(self) -> None:
        sink = RecordingSink()
        scheduler = DayRangeScheduler(sink, 1, rng=ScriptedRandom([1, 1, 1]))
        scheduler.run(Date(2024, 2, 28), Date(2024, 3, 1))
        assert [day for day, _ in sink.calls] == ["2024-02-28", "2024-02-29", "2024-03-01"]

        sink = RecordingSink()
        DayRangeScheduler(sink, 1, rng=ScriptedRandom([1, 1])).run(Date(2024, 12, 31), Date(2025, 1, 1))
        assert [day for day, _ in sink.calls] == ["2024-12-31", "2025-01-01"]

    def test_zero_draws_make_no_calls(self) -> None:
        sink = RecordingSink()
        result = DayRangeScheduler(sink, 4, rng=ScriptedRandom([0] * 10)).run(Date(2024, 1, 1), Date(2024, 1, 10))
        assert sink.calls == []
        assert result.days_processed == 10
        assert result.total_commits == 0
        assert result.average_per_active_day == 0.0

    def test_reversed_range(self) -> None:
        with pytest.raises(OrderError):
            DayRangeScheduler(RecordingSink(), 2).run(Date(2024, 1, 2), Date(2024, 1, 1))


class TestScheduleInvariants:
    @given(
        start=st.dates(min_value=date(1900, 1, 1), max_value=date(2099, 12, 1)).map(Date.from_date),
        span=st.integers(min_value=0, max_value=60),
        max_commits=st.integers(min_value=1, max_value=50),
        seed=st.integers(min_value=0, max_value=2**32),
    )
    def test_counts(self, start: Date, span: int, max_commits: int, seed: int) -> None:
        end = Date.from_date(start.to_date() + timedelta(days=span))
        sink = RecordingSink()
        result = DayRangeScheduler(sink, max_commits, rng=random.Random(seed)).run(start, end)

        assert result.days_processed == day_count(start, end) == span + 1
        assert result.total_commits == sum(result.daily_counts) == len(sink.calls)
        assert all(0 <= count <= max_commits for count in result.daily_counts)

    def test_seeded_runs_are_reproducible(self) -> None:
        runs = []
        for _ in range(2):
            sink = RecordingSink()
            DayRangeScheduler(sink, 7, rng=random.Random(42)).run(Date(2024, 1, 1), Date(2024, 3, 1))
            runs.append(sink.calls)
        assert runs[0] == runs[1]


class TestScheduleFailures:
    def test_sink_error_aborts_run(self) -> None:
        sink = RecordingSink(fail_on=("2024-01-02", 2), error=SinkError("boom"))
        scheduler = DayRangeScheduler(sink, 5, rng=ScriptedRandom([1, 3, 2]))

        with pytest.raises(SinkError) as excinfo:
            scheduler.run(Date(2024, 1, 1), Date(2024, 1, 3))

        exc = excinfo.value
        assert exc.date == Date(2024, 1, 2)
        assert exc.sequence == 2
        assert exc.partial.days_processed == 1
        assert exc.partial.total_commits == 1
        assert sink.calls == [("2024-01-01", 1), ("2024-01-02", 1)]

    def test_unexpected_exception_is_wrapped(self) -> None:
        sink = RecordingSink(fail_on=("2024-01-01", 1), error=OSError("disk full"))
        scheduler = DayRangeScheduler(sink, 5, rng=ScriptedRandom([1]))

        with pytest.raises(SinkError, match="Failed to create commit 1 for 2024-01-01") as excinfo:
            scheduler.run(Date(2024, 1, 1), Date(2024, 1, 3))

        assert isinstance(excinfo.value.__cause__, OSError)
        assert excinfo.value.partial.days_processed == 0


class TestScheduleOptions:
    def test_delay_sleeps_once_per_day(self) -> None:
        sleeps = []
        scheduler = DayRangeScheduler(RecordingSink(), 1, rng=ScriptedRandom([0, 1, 0]), delay=0.25, sleep=sleeps.append)
        scheduler.run(Date(2024, 1, 1), Date(2024, 1, 3))
        assert sleeps == [0.25, 0.25, 0.25]

    def test_no_sleep_without_delay(self) -> None:
        sleeps = []
        DayRangeScheduler(RecordingSink(), 1, rng=ScriptedRandom([1]), sleep=sleeps.append).run(
            Date(2024, 1, 1), Date(2024, 1, 1)
        )
        assert sleeps == []

    def test_on_day_callback(self) -> None:
        seen = []
        scheduler = DayRangeScheduler(
            RecordingSink(), 3, rng=ScriptedRandom([3, 0]), on_day=lambda day, n: seen.append((str(day), n))
        )
        scheduler.run(Date(2024, 1, 1), Date(2024, 1, 2))
        assert seen == [("2024-01-01", 3), ("2024-01-02", 0)]

    @pytest.mark.parametrize("kwargs", [{"max_commits_per_day": -1}, {"max_commits_per_day": 1, "delay": -0.1}])
    def test_invalid_options(self, kwargs) -> None:
        with pytest.raises(ConfigError):
            DayRangeScheduler(RecordingSink(), **kwargs)

    def test_recording_sink_satisfies_protocol(self) -> None:
        assert isinstance(RecordingSink(), CommitSink)


class TestScheduleResult:
    def test_average_per_active_day(self) -> None:
        result = ScheduleResult()
        for count in (2, 0, 4):
            result.record_day(count)
        assert result.average_per_active_day == 3.0
