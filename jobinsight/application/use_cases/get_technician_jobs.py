"""Technician jobs use case."""

from jobinsight.application.dto import (
    Pagination,
    TechnicianJobsData,
    TechnicianJobsSummary,
)
from jobinsight.application.interfaces.record_store import RecordStoreInterface
from jobinsight.application.operations import (
    Dimension,
    job_count,
    job_distribution,
    job_page,
)
from jobinsight.application.services.result_formatter import ResultFormatter
from jobinsight.config.logging import get_logger
from jobinsight.domain.value_objects.job_filter import JobFilter
from jobinsight.infrastructure.monitoring.metrics import track_operation

logger = get_logger(__name__)


class GetTechnicianJobsUseCase:
    """Paginated job rows for selected technicians plus summary counts."""

    def __init__(self, record_store: RecordStoreInterface, formatter: ResultFormatter):
        self.record_store = record_store
        self.formatter = formatter

    @track_operation("technician_jobs")
    async def execute(self, job_filter: JobFilter) -> TechnicianJobsData:
        jobs = await self.record_store.fetch_jobs(
            job_page("technician_jobs", job_filter)
        )
        total = await self.record_store.count(job_count("technician_jobs", job_filter))

        counts = {}
        for dimension, field in (
            (Dimension.STATUS, "status_counts"),
            (Dimension.TYPE, "type_counts"),
            (Dimension.PRIORITY, "priority_counts"),
        ):
            groups = await self.record_store.group(
                job_distribution(
                    f"technician_jobs_{dimension.value}", job_filter, dimension
                )
            )
            counts[field] = self.formatter.counts_by_key(groups)
        summary = TechnicianJobsSummary(total_jobs=total, **counts)

        logger.info(
            "Technician jobs fetched",
            returned=len(jobs),
            total=total,
            page=job_filter.page.page,
            limit=job_filter.page.limit,
        )
        return TechnicianJobsData(
            jobs=[self.formatter.job_row(job) for job in jobs],
            pagination=Pagination.of(total, job_filter.page),
            summary=summary,
        )
