"""Job overview use case."""

from dataclasses import dataclass
from datetime import datetime, tzinfo
from typing import Callable

from jobinsight.application.dto import OverviewData
from jobinsight.application.services.cache_resolver import CacheResolver
from jobinsight.application.services.overview_aggregation import OverviewAggregation
from jobinsight.config.logging import get_logger
from jobinsight.domain.value_objects.date_window import day_window, utcnow
from jobinsight.domain.value_objects.job_filter import JobFilter
from jobinsight.infrastructure.monitoring.metrics import track_operation

logger = get_logger(__name__)

SOURCE_PRECOMPUTED = "precomputed"
SOURCE_COMPUTED = "computed"


@dataclass
class OverviewResult:
    data: OverviewData
    source: str


class GetOverviewUseCase:
    """Paginated job rows, headline metrics and distributions."""

    def __init__(
        self,
        aggregation: OverviewAggregation,
        cache_resolver: CacheResolver,
        tz: tzinfo,
        clock: Callable[[], datetime] = utcnow,
    ):
        self.aggregation = aggregation
        self.cache_resolver = cache_resolver
        self.tz = tz
        self.clock = clock

    @track_operation("overview")
    async def execute(self, job_filter: JobFilter) -> OverviewResult:
        cached = await self.cache_resolver.resolve(job_filter)
        if cached is not None:
            return OverviewResult(data=cached.data, source=SOURCE_PRECOMPUTED)

        data = await self.aggregation.compute(
            job_filter, today=day_window(self.clock(), self.tz)
        )
        logger.info(
            "Overview computed live",
            total=data.pagination.total,
            page=job_filter.page.page,
            limit=job_filter.page.limit,
        )
        return OverviewResult(data=data, source=SOURCE_COMPUTED)
