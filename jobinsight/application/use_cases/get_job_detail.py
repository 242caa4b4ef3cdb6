"""Job detail use case."""

from uuid import UUID

from jobinsight.application.dto import JobDetailData
from jobinsight.application.interfaces.record_store import RecordStoreInterface
from jobinsight.application.operations import job_detail
from jobinsight.application.services.result_formatter import ResultFormatter
from jobinsight.config.logging import get_logger
from jobinsight.domain.exceptions.not_found_error import JobNotFoundError
from jobinsight.domain.value_objects.job_filter import JobFilter
from jobinsight.infrastructure.monitoring.metrics import track_operation

logger = get_logger(__name__)


class GetJobDetailUseCase:
    """Fully enriched job with its status timeline."""

    def __init__(self, record_store: RecordStoreInterface, formatter: ResultFormatter):
        self.record_store = record_store
        self.formatter = formatter

    @track_operation("job_detail")
    async def execute(self, customer_id: UUID, job_id: UUID) -> JobDetailData:
        # The job is looked up by id alone; customer_id only scopes the route
        jobs = await self.record_store.fetch_jobs(job_detail(JobFilter(job_id=job_id)))
        if not jobs:
            raise JobNotFoundError(str(job_id))

        job = jobs[0]
        logger.debug(
            "Job detail fetched",
            customer_id=str(customer_id),
            job_id=str(job_id),
            history_events=len(job.status_history),
        )
        return self.formatter.job_detail(job)
