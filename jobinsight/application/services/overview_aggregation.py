"""Overview aggregation shared by live requests and snapshot precomputation."""

from typing import List

from jobinsight.application.dto import (
    DistributionEntry,
    Distributions,
    OverviewData,
    OverviewMetrics,
    Pagination,
)
from jobinsight.application.interfaces.record_store import (
    GroupRow,
    RecordStoreInterface,
)
from jobinsight.application.operations import (
    TOP_N,
    Dimension,
    job_count,
    job_distribution,
    job_page,
    within_window,
)
from jobinsight.application.services.result_formatter import ResultFormatter
from jobinsight.config.logging import get_logger
from jobinsight.domain.value_objects.date_window import DateWindow
from jobinsight.domain.value_objects.job_filter import JobFilter
from jobinsight.domain.value_objects.job_status import is_closure_status

logger = get_logger(__name__)


def _closed(groups: List[GroupRow]) -> int:
    return sum(g.count for g in groups if is_closure_status(g.keys[0]))


class OverviewAggregation:
    """Computes the Overview payload for one filter.

    Metrics and distributions use the same predicate as the job page, so the
    status distribution always sums to the paginated total.
    """

    def __init__(self, record_store: RecordStoreInterface, formatter: ResultFormatter):
        self.record_store = record_store
        self.formatter = formatter

    async def compute(
        self,
        job_filter: JobFilter,
        today: DateWindow,
        include_locations: bool = True,
    ) -> OverviewData:
        jobs = await self.record_store.fetch_jobs(job_page("overview", job_filter))
        total = await self.record_store.count(job_count("overview", job_filter))

        status_groups = await self.record_store.group(
            job_distribution("overview_status", job_filter, Dimension.STATUS)
        )
        priority_groups = await self.record_store.group(
            job_distribution("overview_priority", job_filter, Dimension.PRIORITY)
        )

        if include_locations:
            province = self.formatter.distribution(
                await self.record_store.group(
                    job_distribution(
                        "overview_province", job_filter, Dimension.PROVINCE, top_n=TOP_N
                    )
                )
            )
            district = self.formatter.distribution(
                await self.record_store.group(
                    job_distribution(
                        "overview_district", job_filter, Dimension.DISTRICT, top_n=TOP_N
                    )
                )
            )
        else:
            province = self._unknown_bucket(total)
            district = self._unknown_bucket(total)

        today_groups = await self.record_store.group(
            job_distribution(
                "overview_today", within_window(job_filter, today), Dimension.STATUS
            )
        )

        closed = _closed(status_groups)
        metrics = OverviewMetrics(
            total_jobs=total,
            open_jobs=total - closed,
            closed_jobs=closed,
            today_jobs=sum(g.count for g in today_groups),
            today_closed=_closed(today_groups),
        )

        logger.debug(
            "Overview computed",
            total=total,
            closed=closed,
            rows=len(jobs),
            include_locations=include_locations,
        )

        return OverviewData(
            jobs=[self.formatter.job_row(job) for job in jobs],
            pagination=Pagination.of(total, job_filter.page),
            metrics=metrics,
            distributions=Distributions(
                status=self.formatter.distribution(status_groups),
                priority=self.formatter.distribution(priority_groups),
                province=province,
                district=district,
            ),
        )

    def _unknown_bucket(self, total: int) -> List[DistributionEntry]:
        """Single null-keyed bucket used when locations are not joined."""
        if not total:
            return []
        return [DistributionEntry(id=None, count=total)]
