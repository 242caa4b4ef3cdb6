"""
Embedded precomputation scheduler.

Each trigger runs in its own asyncio task, so a slow or failing daily run
never delays the weekly one. The clock and the stop event are injected.
"""

import asyncio
from collections import defaultdict
from dataclasses import dataclass
from datetime import datetime, timedelta, tzinfo
from typing import Any, Awaitable, Callable, Dict, List, Optional

from jobinsight.config.logging import bind_context, get_logger
from jobinsight.config.settings import Settings
from jobinsight.domain.value_objects.date_window import to_local, to_naive_utc, utcnow
from jobinsight.domain.value_objects.metric_type import MetricType

logger = get_logger(__name__)


@dataclass(frozen=True)
class Trigger:
    """Wall-clock schedule in the reporting timezone; weekday 0 is Monday."""

    name: str
    metric_type: MetricType
    hour: int
    minute: int = 0
    weekday: Optional[int] = None

    def next_fire_time(self, now: datetime, tz: tzinfo) -> datetime:
        """First fire time strictly after ``now`` (both naive UTC)."""
        local_now = to_local(now, tz)
        candidate = local_now.replace(
            hour=self.hour, minute=self.minute, second=0, microsecond=0
        )
        if self.weekday is not None:
            candidate += timedelta(days=(self.weekday - candidate.weekday()) % 7)
        if candidate <= local_now:
            candidate += timedelta(days=7 if self.weekday is not None else 1)
        return to_naive_utc(candidate, tz)


def build_triggers(config: Settings) -> List[Trigger]:
    return [
        Trigger(
            name="daily-metrics",
            metric_type=MetricType.DAILY,
            hour=config.PRECOMPUTE_DAILY_HOUR,
            minute=config.PRECOMPUTE_DAILY_MINUTE,
        ),
        Trigger(
            name="weekly-metrics",
            metric_type=MetricType.WEEKLY,
            hour=config.PRECOMPUTE_WEEKLY_HOUR,
            minute=config.PRECOMPUTE_WEEKLY_MINUTE,
            weekday=config.PRECOMPUTE_WEEKLY_WEEKDAY,
        ),
    ]


class PrecomputationScheduler:
    """Runs precomputation at each trigger's fire time until stopped."""

    def __init__(
        self,
        triggers: List[Trigger],
        run: Callable[[MetricType], Awaitable[Any]],
        tz: tzinfo,
        clock: Callable[[], datetime] = utcnow,
        stop_event: Optional[asyncio.Event] = None,
    ):
        self.triggers = triggers
        self.run = run
        self.tz = tz
        self.clock = clock
        self.stop_event = stop_event or asyncio.Event()

        self.tasks: Dict[str, asyncio.Task] = {}
        self.runs: Dict[str, int] = defaultdict(int)
        self.failures: Dict[str, int] = defaultdict(int)
        self.is_running = False

    async def start(self) -> None:
        """Start one loop per trigger."""
        if self.is_running:
            return
        self.stop_event.clear()
        for trigger in self.triggers:
            self.tasks[trigger.name] = asyncio.create_task(
                self._loop(trigger), name=f"precompute:{trigger.name}"
            )
        self.is_running = True
        logger.info(
            "Precomputation scheduler started",
            triggers=[trigger.name for trigger in self.triggers],
        )

    async def stop(self) -> None:
        """Signal every loop to exit and wait for them."""
        self.stop_event.set()
        for name, task in self.tasks.items():
            if not task.done():
                try:
                    await asyncio.wait_for(task, timeout=5)
                except asyncio.TimeoutError:
                    task.cancel()
                    try:
                        await task
                    except asyncio.CancelledError:
                        pass
                    logger.warning("Precomputation loop cancelled", trigger=name)
        self.tasks.clear()
        self.is_running = False
        logger.info("Precomputation scheduler stopped")

    async def run_once(self, trigger: Trigger) -> bool:
        """Run one trigger; failures are logged and counted, never raised."""
        self.runs[trigger.name] += 1
        try:
            await self.run(trigger.metric_type)
        except Exception as e:
            self.failures[trigger.name] += 1
            logger.error(
                "Precomputation run failed",
                trigger=trigger.name,
                metric_type=trigger.metric_type.value,
                error=str(e),
                exc_info=True,
            )
            return False
        return True

    async def _loop(self, trigger: Trigger) -> None:
        # Each loop runs in its own task, so the binding stays local to it
        bind_context(trigger=trigger.name)
        while not self.stop_event.is_set():
            now = self.clock()
            fire_at = trigger.next_fire_time(now, self.tz)
            delay = max((fire_at - now).total_seconds(), 0.0)
            logger.debug(
                "Next precomputation scheduled",
                trigger=trigger.name,
                fire_at=fire_at.isoformat(),
                delay_seconds=round(delay, 1),
            )

            try:
                await asyncio.wait_for(self.stop_event.wait(), timeout=delay)
                break
            except asyncio.TimeoutError:
                pass

            await self.run_once(trigger)

    def get_stats(self) -> Dict[str, Any]:
        return {
            "is_running": self.is_running,
            "triggers": {
                trigger.name: {
                    "metric_type": trigger.metric_type.value,
                    "runs": self.runs[trigger.name],
                    "failures": self.failures[trigger.name],
                    "next_fire_time": trigger.next_fire_time(
                        self.clock(), self.tz
                    ).isoformat(),
                }
                for trigger in self.triggers
            },
        }
