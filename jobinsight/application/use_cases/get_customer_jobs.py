"""Customer job history use case."""

from uuid import UUID

from jobinsight.application.dto import CustomerJobsData, Pagination
from jobinsight.application.interfaces.record_store import RecordStoreInterface
from jobinsight.application.operations import customer_jobs, job_count
from jobinsight.application.services.result_formatter import ResultFormatter
from jobinsight.config.logging import get_logger
from jobinsight.domain.exceptions.not_found_error import CustomerNotFoundError
from jobinsight.domain.value_objects.job_filter import JobFilter, PageRequest
from jobinsight.infrastructure.monitoring.metrics import track_operation

logger = get_logger(__name__)


class GetCustomerJobsUseCase:
    """Jobs at any of a customer's locations, newest first."""

    def __init__(self, record_store: RecordStoreInterface, formatter: ResultFormatter):
        self.record_store = record_store
        self.formatter = formatter

    @track_operation("customer_jobs")
    async def execute(self, customer_id: UUID, page: PageRequest) -> CustomerJobsData:
        if not await self.record_store.customer_exists(customer_id):
            raise CustomerNotFoundError(str(customer_id))

        job_filter = JobFilter(customer_id=customer_id, page=page)
        jobs = await self.record_store.fetch_jobs(customer_jobs(job_filter))
        total = await self.record_store.count(job_count("customer_jobs", job_filter))

        logger.info(
            "Customer jobs fetched",
            customer_id=str(customer_id),
            returned=len(jobs),
            total=total,
        )
        return CustomerJobsData(
            jobs=[self.formatter.customer_job_row(job) for job in jobs],
            pagination=Pagination.of(total, page),
        )
