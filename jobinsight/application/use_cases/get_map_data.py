"""Map data use case."""

from dataclasses import replace
from typing import List

from jobinsight.application.dto import MapPoint
from jobinsight.application.interfaces.record_store import RecordStoreInterface
from jobinsight.application.operations import map_points
from jobinsight.application.services.result_formatter import ResultFormatter
from jobinsight.config.logging import get_logger
from jobinsight.domain.value_objects.job_filter import JobFilter
from jobinsight.infrastructure.monitoring.metrics import track_operation

logger = get_logger(__name__)


class GetMapDataUseCase:
    """Jobs with plottable coordinates."""

    def __init__(self, record_store: RecordStoreInterface, formatter: ResultFormatter):
        self.record_store = record_store
        self.formatter = formatter

    @track_operation("map_data")
    async def execute(self, job_filter: JobFilter) -> List[MapPoint]:
        # Map data is unpaginated and not filtered by team leader
        job_filter = replace(job_filter, team_leader=None)
        jobs = await self.record_store.fetch_jobs(map_points(job_filter))
        points = self.formatter.map_points(jobs)

        logger.info(
            "Map data built",
            jobs=len(jobs),
            plotted=len(points),
            dropped=len(jobs) - len(points),
        )
        return points
