"""Technician and geographic analytics endpoints."""

from fastapi import APIRouter, status

from jobinsight.api.dependencies import (
    FilterNormalizerDep,
    FilterParamsDep,
    GeographicUseCaseDep,
    TechnicianJobsUseCaseDep,
    TechnicianPerformanceUseCaseDep,
)
from jobinsight.api.schemas.common import Envelope, failure_response
from jobinsight.application.dto import (
    GeographicData,
    TechnicianJobsData,
    TechnicianPerformanceData,
)
from jobinsight.config.logging import get_logger
from jobinsight.domain.exceptions.store_error import StoreError

logger = get_logger(__name__)
router = APIRouter(prefix="/analytics", tags=["analytics"])


@router.get(
    "/technician-performance", response_model=Envelope[TechnicianPerformanceData]
)
async def get_technician_performance(
    params: FilterParamsDep,
    normalizer: FilterNormalizerDep,
    use_case: TechnicianPerformanceUseCaseDep,
):
    """Per-technician rating averages and the latest reviews."""
    job_filter = normalizer.normalize(params)
    try:
        data = await use_case.execute(job_filter)
    except StoreError as e:
        logger.error("Failed to fetch technician performance", error=str(e))
        return failure_response(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            "Failed to fetch technician performance",
            TechnicianPerformanceData(),
        )

    return Envelope[TechnicianPerformanceData](data=data)


@router.get("/geographic", response_model=Envelope[GeographicData])
async def get_geographic(
    params: FilterParamsDep,
    normalizer: FilterNormalizerDep,
    use_case: GeographicUseCaseDep,
):
    """Province, district and status-by-province breakdowns."""
    job_filter = normalizer.normalize(params)
    try:
        data = await use_case.execute(job_filter)
    except StoreError as e:
        logger.error("Failed to fetch geographic data", error=str(e))
        return failure_response(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            "Failed to fetch geographic data",
            GeographicData(),
        )

    return Envelope[GeographicData](data=data)


@router.get("/technician-jobs", response_model=Envelope[TechnicianJobsData])
async def get_technician_jobs(
    params: FilterParamsDep,
    normalizer: FilterNormalizerDep,
    use_case: TechnicianJobsUseCaseDep,
):
    """Jobs assigned to the selected technicians with summary counts."""
    job_filter = normalizer.normalize(params)
    try:
        data = await use_case.execute(job_filter)
    except StoreError as e:
        logger.error("Failed to fetch technician jobs", error=str(e))
        return failure_response(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            "Failed to fetch technician jobs",
            TechnicianJobsData.empty(job_filter.page.limit),
        )

    return Envelope[TechnicianJobsData](data=data)
