"""Geographic distribution use case."""

from collections import OrderedDict
from typing import Dict, List, Optional

from jobinsight.application.dto import (
    DistrictBreakdown,
    DistrictCount,
    GeographicData,
    LocationSample,
    ProvinceData,
    ProvinceStatus,
    StatusCount,
)
from jobinsight.application.interfaces.record_store import (
    GroupRow,
    RecordStoreInterface,
)
from jobinsight.application.operations import (
    LOCATION_SAMPLE_SIZE,
    SAMPLE_SCAN_PAGE_SIZE,
    TOP_N,
    Dimension,
    job_distribution,
    location_samples,
)
from jobinsight.application.services.result_formatter import ResultFormatter
from jobinsight.config.logging import get_logger
from jobinsight.domain.value_objects.job_filter import JobFilter
from jobinsight.infrastructure.monitoring.metrics import track_operation

logger = get_logger(__name__)


def _nest(groups: List[GroupRow]) -> "OrderedDict[Optional[str], List[GroupRow]]":
    """Group two-key rows by their first key, keeping count order."""
    nested: "OrderedDict[Optional[str], List[GroupRow]]" = OrderedDict()
    for group in groups:
        nested.setdefault(group.keys[0], []).append(group)
    return nested


def _top(totals: Dict[Optional[str], int]) -> List[Optional[str]]:
    ranked = sorted(totals.items(), key=lambda item: item[1], reverse=True)
    return [key for key, _ in ranked[:TOP_N]]


class GetGeographicUseCase:
    """Province counts with samples, districts per province, status per province."""

    def __init__(self, record_store: RecordStoreInterface, formatter: ResultFormatter):
        self.record_store = record_store
        self.formatter = formatter

    @track_operation("geographic")
    async def execute(self, job_filter: JobFilter) -> GeographicData:
        provinces = await self.record_store.group(
            job_distribution(
                "geographic_province", job_filter, Dimension.PROVINCE, top_n=TOP_N
            )
        )
        districts = _nest(
            await self.record_store.group(
                job_distribution(
                    "geographic_district",
                    job_filter,
                    Dimension.PROVINCE,
                    Dimension.DISTRICT,
                )
            )
        )
        statuses = _nest(
            await self.record_store.group(
                job_distribution(
                    "geographic_status",
                    job_filter,
                    Dimension.PROVINCE,
                    Dimension.STATUS,
                )
            )
        )

        samples = await self._samples(job_filter, [g.keys[0] for g in provinces])
        province_data = [
            ProvinceData(
                province=group.keys[0],
                count=group.count,
                location_sample=samples.get(group.keys[0], []),
            )
            for group in provinces
        ]

        district_totals = {
            province: sum(g.count for g in rows) for province, rows in districts.items()
        }
        district_breakdown = [
            DistrictBreakdown(
                province=province,
                districts=[
                    DistrictCount(name=g.keys[1], count=g.count)
                    for g in districts[province][:TOP_N]
                ],
                total_count=district_totals[province],
            )
            for province in _top(district_totals)
        ]

        status_totals = {
            province: sum(g.count for g in rows) for province, rows in statuses.items()
        }
        status_by_province = [
            ProvinceStatus(
                province=province,
                statuses=[
                    StatusCount(status=g.keys[1], count=g.count)
                    for g in statuses[province]
                ],
                total=status_totals[province],
            )
            for province in _top(status_totals)
        ]

        logger.info(
            "Geographic analysis computed",
            provinces=len(province_data),
            district_groups=len(district_breakdown),
            status_groups=len(status_by_province),
        )
        return GeographicData(
            province_data=province_data,
            district_breakdown=district_breakdown,
            status_by_province=status_by_province,
        )

    async def _samples(
        self, job_filter: JobFilter, provinces: List[Optional[str]]
    ) -> Dict[str, List[LocationSample]]:
        """Newest plottable jobs per province, scanning pages until each has enough."""
        # Jobs without a province cannot be selected by a province predicate
        wanted = tuple(p for p in provinces if p is not None)
        samples: Dict[str, List[LocationSample]] = {p: [] for p in wanted}
        page = 1
        while wanted:
            # Same province set on every page so offsets stay consistent
            jobs = await self.record_store.fetch_jobs(
                location_samples(job_filter, wanted, page)
            )
            for job in jobs:
                bucket = samples.get(job.location.province)
                if bucket is None or len(bucket) == LOCATION_SAMPLE_SIZE:
                    continue
                coordinates = self.formatter.job_coordinates(job)
                if coordinates is None:
                    continue
                bucket.append(
                    LocationSample(
                        job_no=job.no, status=job.status, coordinates=list(coordinates)
                    )
                )
            full = all(len(s) == LOCATION_SAMPLE_SIZE for s in samples.values())
            if full or len(jobs) < SAMPLE_SCAN_PAGE_SIZE:
                break
            page += 1
        return samples
