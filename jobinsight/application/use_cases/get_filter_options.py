"""Filter options use case."""

from typing import List

from jobinsight.application.dto import FilterOptions
from jobinsight.application.interfaces.record_store import (
    GroupRow,
    RecordStoreInterface,
)
from jobinsight.application.operations import (
    Dimension,
    job_distribution,
    technician_roster,
)
from jobinsight.application.services.filter_normalizer import ALL
from jobinsight.application.services.result_formatter import ResultFormatter
from jobinsight.config.logging import get_logger
from jobinsight.domain.value_objects.job_filter import JobFilter
from jobinsight.infrastructure.monitoring.metrics import track_operation

logger = get_logger(__name__)


def _options(groups: List[GroupRow]) -> List[str]:
    values = sorted({str(g.keys[0]) for g in groups if g.keys[0]})
    return [ALL, *values]


class GetFilterOptionsUseCase:
    """Distinct values offered by the dashboard filters."""

    def __init__(self, record_store: RecordStoreInterface, formatter: ResultFormatter):
        self.record_store = record_store
        self.formatter = formatter

    @track_operation("filter_options")
    async def execute(self) -> FilterOptions:
        unfiltered = JobFilter()
        options = {}
        for dimension, field in (
            (Dimension.STATUS, "statuses"),
            (Dimension.TYPE, "types"),
            (Dimension.PRIORITY, "priorities"),
            (Dimension.PROVINCE, "provinces"),
        ):
            groups = await self.record_store.group(
                job_distribution("filter_options", unfiltered, dimension)
            )
            options[field] = _options(groups)

        technicians = [
            self.formatter.technician_option(t)
            for t in await self.record_store.fetch_technicians(technician_roster())
        ]
        # Technicians without any name cannot be picked
        technicians = [t for t in technicians if t.full_name]
        team_leaders = [ALL, *dict.fromkeys(t.full_name for t in technicians)]

        logger.debug(
            "Filter options built",
            technicians=len(technicians),
            provinces=len(options["provinces"]) - 1,
        )
        return FilterOptions(
            technicians=technicians, team_leaders=team_leaders, **options
        )
