"""Customer list use case."""

from jobinsight.application.dto import CustomerListData, Pagination
from jobinsight.application.interfaces.record_store import RecordStoreInterface
from jobinsight.application.operations import customer_count, customer_page
from jobinsight.application.services.result_formatter import ResultFormatter
from jobinsight.config.logging import get_logger
from jobinsight.domain.value_objects.job_filter import JobFilter
from jobinsight.infrastructure.monitoring.metrics import track_operation

logger = get_logger(__name__)


class ListCustomersUseCase:
    """Customers by name, searchable over name, phone and email."""

    def __init__(self, record_store: RecordStoreInterface, formatter: ResultFormatter):
        self.record_store = record_store
        self.formatter = formatter

    @track_operation("customer_list")
    async def execute(self, job_filter: JobFilter) -> CustomerListData:
        records = await self.record_store.fetch_customers(customer_page(job_filter))
        total = await self.record_store.count(customer_count(job_filter))

        logger.debug("Customers listed", returned=len(records), total=total)
        return CustomerListData(
            customers=[self.formatter.customer_summary(r) for r in records],
            pagination=Pagination.of(total, job_filter.page),
        )
