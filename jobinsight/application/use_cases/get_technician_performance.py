"""Technician performance use case."""

from jobinsight.application.dto import TechnicianPerformanceData
from jobinsight.application.interfaces.record_store import RecordStoreInterface
from jobinsight.application.operations import recent_reviews, technician_performance
from jobinsight.application.services.result_formatter import ResultFormatter
from jobinsight.config.logging import get_logger
from jobinsight.domain.value_objects.job_filter import JobFilter
from jobinsight.infrastructure.monitoring.metrics import track_operation

logger = get_logger(__name__)


class GetTechnicianPerformanceUseCase:
    """Per-technician review averages and the most recent reviews.

    The window applies to the review's creation time, not the job's.
    """

    def __init__(self, record_store: RecordStoreInterface, formatter: ResultFormatter):
        self.record_store = record_store
        self.formatter = formatter

    @track_operation("technician_performance")
    async def execute(self, job_filter: JobFilter) -> TechnicianPerformanceData:
        groups = await self.record_store.group(technician_performance(job_filter))
        reviews = await self.record_store.fetch_reviews(recent_reviews(job_filter))

        logger.info(
            "Technician performance computed",
            technicians=len(groups),
            recent_reviews=len(reviews),
            technician_filter=len(job_filter.technician_ids),
        )
        return TechnicianPerformanceData(
            performance_summary=self.formatter.performance_summary(groups),
            recent_reviews=self.formatter.recent_reviews(reviews),
        )
