"""Cache resolver for the Overview operation."""

from dataclasses import dataclass
from datetime import datetime, timedelta, tzinfo
from typing import Callable, Optional

from pydantic import ValidationError as PayloadValidationError

from jobinsight.application.dto import OverviewData
from jobinsight.application.interfaces.record_store import (
    MetricSnapshotRepositoryInterface,
)
from jobinsight.config.logging import get_logger
from jobinsight.domain.exceptions.store_error import StoreError
from jobinsight.domain.value_objects.date_window import day_start, utcnow
from jobinsight.domain.value_objects.job_filter import JobFilter, PageRequest
from jobinsight.domain.value_objects.metric_type import MetricType
from jobinsight.infrastructure.monitoring.metrics import record_cache_lookup

logger = get_logger(__name__)

SNAPSHOT_MAX_AGE = timedelta(hours=24)


@dataclass
class CachedOverview:
    data: OverviewData
    anchor: datetime


class CacheResolver:
    """Serves today's unfiltered Overview from the latest daily snapshot."""

    def __init__(
        self,
        snapshot_repo: MetricSnapshotRepositoryInterface,
        tz: tzinfo,
        default_limit: int = 10,
        clock: Callable[[], datetime] = utcnow,
    ):
        self.snapshot_repo = snapshot_repo
        self.tz = tz
        self.default_limit = default_limit
        self.clock = clock

    def is_eligible(self, job_filter: JobFilter) -> bool:
        """Only "today through now or later" with no other filter qualifies."""
        if job_filter.window is None:
            return False
        if job_filter.has_categorical_filters():
            return False
        if job_filter.page != PageRequest(page=1, limit=self.default_limit):
            return False

        today_start = day_start(self.clock(), self.tz)
        return (
            job_filter.window.start == today_start
            and job_filter.window.end >= today_start
        )

    async def resolve(self, job_filter: JobFilter) -> Optional[CachedOverview]:
        """Return the cached Overview, or None when live computation is needed."""
        if not self.is_eligible(job_filter):
            record_cache_lookup("bypass")
            return None

        not_before = day_start(self.clock(), self.tz) - SNAPSHOT_MAX_AGE
        try:
            snapshot = await self.snapshot_repo.find_latest(
                MetricType.DAILY, not_before
            )
        except StoreError as e:
            logger.warning("Snapshot lookup failed, computing live", error=str(e))
            record_cache_lookup("error")
            return None

        if snapshot is None:
            record_cache_lookup("miss")
            return None

        if not snapshot.is_current_schema:
            logger.info(
                "Snapshot schema outdated",
                anchor=snapshot.date.isoformat(),
                schema_version=snapshot.schema_version,
            )
            record_cache_lookup("miss")
            return None

        try:
            data = OverviewData.model_validate(snapshot.payload)
        except PayloadValidationError as e:
            logger.warning(
                "Snapshot payload invalid",
                anchor=snapshot.date.isoformat(),
                error=str(e),
            )
            record_cache_lookup("miss")
            return None

        record_cache_lookup("hit")
        logger.info("Overview served from snapshot", anchor=snapshot.date.isoformat())
        return CachedOverview(data=data, anchor=snapshot.date)
