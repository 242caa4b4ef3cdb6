"""Metrics precomputation use case."""

import time
from datetime import datetime, tzinfo
from typing import Callable, Optional

from jobinsight.application.interfaces.record_store import (
    MetricSnapshotRepositoryInterface,
)
from jobinsight.application.services.overview_aggregation import OverviewAggregation
from jobinsight.config.logging import get_logger
from jobinsight.domain.entities.metric_snapshot import MetricSnapshot
from jobinsight.domain.value_objects.date_window import (
    DateWindow,
    day_window,
    previous_day_window,
    previous_week_window,
    utcnow,
)
from jobinsight.domain.value_objects.job_filter import JobFilter, PageRequest
from jobinsight.domain.value_objects.metric_type import MetricType
from jobinsight.infrastructure.monitoring.metrics import record_precompute_run

logger = get_logger(__name__)


class PrecomputeMetricsUseCase:
    """Computes the unfiltered Overview for a closed period and stores it.

    Daily snapshots cover the previous calendar day, weekly snapshots the
    previous Monday-Sunday week, both in the reporting timezone. The snapshot
    is anchored at the window start, so rerunning for the same period
    replaces the stored row.
    """

    def __init__(
        self,
        aggregation: OverviewAggregation,
        snapshot_repo: MetricSnapshotRepositoryInterface,
        tz: tzinfo,
        page_limit: int = 10,
        join_locations: bool = False,
        clock: Callable[[], datetime] = utcnow,
    ):
        self.aggregation = aggregation
        self.snapshot_repo = snapshot_repo
        self.tz = tz
        self.page_limit = page_limit
        self.join_locations = join_locations
        self.clock = clock

    def window_for(self, metric_type: MetricType, now: datetime) -> DateWindow:
        if metric_type == MetricType.DAILY:
            return previous_day_window(now, self.tz)
        return previous_week_window(now, self.tz)

    async def execute(
        self, metric_type: MetricType, now: Optional[datetime] = None
    ) -> MetricSnapshot:
        now = now or self.clock()
        window = self.window_for(metric_type, now)
        started = time.time()

        logger.info(
            "Precomputing metrics",
            metric_type=metric_type.value,
            start=window.start.isoformat(),
            end=window.end.isoformat(),
        )

        try:
            data = await self.aggregation.compute(
                JobFilter(
                    window=window, page=PageRequest(page=1, limit=self.page_limit)
                ),
                # "Today" inside a snapshot is the last calendar day it covers
                today=day_window(window.end, self.tz),
                include_locations=self.join_locations,
            )
            snapshot = await self.snapshot_repo.upsert(
                MetricSnapshot(
                    metric_type=metric_type,
                    date=window.start,
                    period=window,
                    payload=data.model_dump(by_alias=True, mode="json"),
                )
            )
            await self.snapshot_repo.commit()
        except Exception:
            record_precompute_run(metric_type.value, "failure", time.time() - started)
            raise

        record_precompute_run(metric_type.value, "success", time.time() - started)
        logger.info(
            "Metrics precomputed",
            metric_type=metric_type.value,
            anchor=window.start.isoformat(),
            total_jobs=data.metrics.total_jobs,
        )
        return snapshot
