"""
Unit tests for the precomputation scheduler.
"""

import asyncio
from datetime import datetime, timedelta, timezone
from unittest.mock import AsyncMock

import pytest

from jobinsight.background.scheduler import (
    PrecomputationScheduler,
    Trigger,
    build_triggers,
)
from jobinsight.config.settings import Settings
from jobinsight.domain.value_objects.metric_type import MetricType

BANGKOK = timezone(timedelta(hours=7))

DAILY = Trigger(name="daily-metrics", metric_type=MetricType.DAILY, hour=1)
WEEKLY = Trigger(
    name="weekly-metrics", metric_type=MetricType.WEEKLY, hour=2, weekday=0
)


class TestTrigger:
    """Test trigger fire time computation."""

    def test_daily_fires_later_the_same_day(self, utc):
        now = datetime(2026, 10, 14, 0, 30)

        assert DAILY.next_fire_time(now, utc) == datetime(2026, 10, 14, 1, 0)

    def test_daily_rolls_over_after_fire_time(self, fixed_now, utc):
        assert DAILY.next_fire_time(fixed_now, utc) == datetime(2026, 10, 15, 1, 0)

    def test_fire_time_is_strictly_after_now(self, utc):
        now = datetime(2026, 10, 14, 1, 0)

        assert DAILY.next_fire_time(now, utc) == datetime(2026, 10, 15, 1, 0)

    def test_daily_uses_reporting_timezone(self):
        # 01:00 in Bangkok is 18:00 UTC the previous day
        now = datetime(2026, 10, 14, 12, 0)

        assert DAILY.next_fire_time(now, BANGKOK) == datetime(2026, 10, 14, 18, 0)

    def test_weekly_fires_next_monday(self, fixed_now, utc):
        fire_at = WEEKLY.next_fire_time(fixed_now, utc)

        assert fire_at == datetime(2026, 10, 19, 2, 0)
        assert fire_at.weekday() == 0

    def test_weekly_on_monday_after_fire_time_waits_a_week(self, utc):
        now = datetime(2026, 10, 12, 3, 0)

        assert WEEKLY.next_fire_time(now, utc) == datetime(2026, 10, 19, 2, 0)

    def test_build_triggers_from_settings(self):
        config = Settings(
            ENVIRONMENT="test",
            PRECOMPUTE_DAILY_HOUR=3,
            PRECOMPUTE_WEEKLY_WEEKDAY=6,
        )

        daily, weekly = build_triggers(config)

        assert (daily.metric_type, daily.hour, daily.weekday) == (
            MetricType.DAILY,
            3,
            None,
        )
        assert (weekly.metric_type, weekly.weekday) == (MetricType.WEEKLY, 6)


class TestPrecomputationScheduler:
    """Test scheduler loops."""

    @pytest.mark.asyncio
    async def test_run_once_counts_failures_without_raising(self, clock, utc):
        run = AsyncMock(side_effect=RuntimeError("store down"))
        scheduler = PrecomputationScheduler([DAILY], run, utc, clock=clock)

        ok = await scheduler.run_once(DAILY)

        assert ok is False
        assert scheduler.failures["daily-metrics"] == 1
        assert scheduler.runs["daily-metrics"] == 1

    @pytest.mark.asyncio
    async def test_failure_does_not_stop_other_triggers(self, clock, utc):
        async def run(metric_type):
            if metric_type == MetricType.DAILY:
                raise RuntimeError("daily failed")

        scheduler = PrecomputationScheduler([DAILY, WEEKLY], run, utc, clock=clock)

        assert await scheduler.run_once(DAILY) is False
        assert await scheduler.run_once(WEEKLY) is True
        assert scheduler.failures["weekly-metrics"] == 0

    @pytest.mark.asyncio
    async def test_loop_fires_at_trigger_time_and_stops(self, utc):
        fire_at = datetime(2026, 10, 15, 1, 0)
        stop_event = asyncio.Event()
        calls = []

        async def run(metric_type):
            calls.append(metric_type)
            stop_event.set()

        scheduler = PrecomputationScheduler(
            [DAILY],
            run,
            utc,
            clock=lambda: fire_at - timedelta(milliseconds=10),
            stop_event=stop_event,
        )

        await scheduler.start()
        await asyncio.wait_for(stop_event.wait(), timeout=2)
        await scheduler.stop()

        assert calls == [MetricType.DAILY]
        assert scheduler.is_running is False
        assert scheduler.tasks == {}

    @pytest.mark.asyncio
    async def test_stop_before_fire_time_runs_nothing(self, clock, utc):
        run = AsyncMock()
        scheduler = PrecomputationScheduler([DAILY, WEEKLY], run, utc, clock=clock)

        await scheduler.start()
        assert set(scheduler.tasks) == {"daily-metrics", "weekly-metrics"}
        await scheduler.stop()

        run.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_stats_report_next_fire_time(self, clock, utc):
        scheduler = PrecomputationScheduler([DAILY], AsyncMock(), utc, clock=clock)

        stats = scheduler.get_stats()

        assert stats["is_running"] is False
        assert stats["triggers"]["daily-metrics"]["next_fire_time"] == (
            "2026-10-15T01:00:00"
        )


class TestCeleryBeatSchedule:
    """Test the alternative Celery beat backend."""

    def test_weekly_run_is_monday_in_celery_numbering(self):
        from jobinsight.background.celery_app import celery_app

        schedule = celery_app.conf.beat_schedule
        weekly = schedule["precompute-weekly-metrics"]["schedule"]
        daily = schedule["precompute-daily-metrics"]["schedule"]

        # Celery counts Sunday as 0
        assert weekly.day_of_week == {1}
        assert weekly.hour == {2}
        assert daily.hour == {1}
        assert schedule["precompute-daily-metrics"]["task"] == (
            "precompute_daily_metrics_task"
        )
