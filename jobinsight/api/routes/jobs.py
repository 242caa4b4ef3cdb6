"""Job dashboard endpoints."""

from typing import List

from fastapi import APIRouter, status

from jobinsight.api.dependencies import (
    FilterNormalizerDep,
    FilterOptionsUseCaseDep,
    FilterParamsDep,
    MapDataUseCaseDep,
    OverviewUseCaseDep,
)
from jobinsight.api.schemas.common import Envelope, OverviewEnvelope, failure_response
from jobinsight.application.dto import FilterOptions, MapPoint, OverviewData
from jobinsight.application.use_cases.get_overview import SOURCE_COMPUTED
from jobinsight.config.logging import get_logger
from jobinsight.domain.exceptions.store_error import StoreError

logger = get_logger(__name__)
router = APIRouter(prefix="/jobs", tags=["jobs"])


@router.get("/overview", response_model=OverviewEnvelope)
async def get_overview(
    params: FilterParamsDep,
    normalizer: FilterNormalizerDep,
    use_case: OverviewUseCaseDep,
):
    """Paginated jobs with headline metrics and distributions."""
    job_filter = normalizer.normalize(params)
    try:
        result = await use_case.execute(job_filter)
    except StoreError as e:
        logger.error("Failed to fetch job overview", error=str(e))
        return failure_response(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            "Failed to fetch job overview",
            OverviewData.empty(job_filter.page.limit),
            source=SOURCE_COMPUTED,
        )

    return OverviewEnvelope(data=result.data, source=result.source)


@router.get("/map-data", response_model=Envelope[List[MapPoint]])
async def get_map_data(
    params: FilterParamsDep,
    normalizer: FilterNormalizerDep,
    use_case: MapDataUseCaseDep,
):
    """Plottable jobs; rows without valid coordinates are left out."""
    job_filter = normalizer.normalize(params)
    try:
        points = await use_case.execute(job_filter)
    except StoreError as e:
        logger.error("Failed to fetch map data", error=str(e))
        return failure_response(
            status.HTTP_500_INTERNAL_SERVER_ERROR, "Failed to fetch map data", []
        )

    return Envelope[List[MapPoint]](data=points)


@router.get("/filter-options", response_model=Envelope[FilterOptions])
async def get_filter_options(use_case: FilterOptionsUseCaseDep):
    """Selectable values for the dashboard filters."""
    try:
        options = await use_case.execute()
    except StoreError as e:
        logger.error("Failed to fetch filter options", error=str(e))
        return failure_response(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            "Failed to fetch filter options",
            FilterOptions(),
        )

    return Envelope[FilterOptions](data=options)
