"""Customer endpoints."""

from typing import Optional

from fastapi import APIRouter, Query, status

from jobinsight.api.dependencies import (
    CustomerJobsUseCaseDep,
    FilterNormalizerDep,
    FilterParamsDep,
    JobDetailUseCaseDep,
    ListCustomersUseCaseDep,
)
from jobinsight.api.schemas.common import Envelope, failure_response
from jobinsight.application.dto import CustomerJobsData, CustomerListData, JobDetailData
from jobinsight.application.services.filter_normalizer import parse_identifier
from jobinsight.config.logging import get_logger
from jobinsight.config.settings import settings
from jobinsight.domain.exceptions.not_found_error import NotFoundError
from jobinsight.domain.exceptions.store_error import StoreError
from jobinsight.domain.exceptions.validation_error import ValidationError

logger = get_logger(__name__)
router = APIRouter(prefix="/customers", tags=["customers"])


@router.get("", response_model=Envelope[CustomerListData])
async def list_customers(
    params: FilterParamsDep,
    normalizer: FilterNormalizerDep,
    use_case: ListCustomersUseCaseDep,
):
    """Customers matching ``search`` on name, phone or email."""
    job_filter = normalizer.normalize(
        params, default_limit=settings.CUSTOMER_PAGE_LIMIT, with_window=False
    )
    try:
        data = await use_case.execute(job_filter)
    except StoreError as e:
        logger.error("Failed to fetch customers", error=str(e))
        return failure_response(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            "Failed to fetch customers",
            CustomerListData.empty(job_filter.page.limit),
        )

    return Envelope[CustomerListData](data=data)


@router.get("/{customer_id}/jobs", response_model=Envelope[CustomerJobsData])
async def get_customer_jobs(
    customer_id: str,
    normalizer: FilterNormalizerDep,
    use_case: CustomerJobsUseCaseDep,
    page: Optional[str] = Query(None),
    limit: Optional[str] = Query(None),
):
    """Job history across every location the customer owns."""
    page_request = normalizer.normalize_page(page, limit, settings.DEFAULT_PAGE_LIMIT)
    empty = CustomerJobsData.empty(page_request.limit)
    try:
        data = await use_case.execute(
            parse_identifier("customerId", customer_id), page_request
        )
    except ValidationError as e:
        logger.warning("Invalid customer id", customer_id=customer_id)
        return failure_response(status.HTTP_400_BAD_REQUEST, str(e), empty)
    except NotFoundError as e:
        logger.info("Customer not found", customer_id=customer_id)
        return failure_response(status.HTTP_404_NOT_FOUND, str(e), empty)
    except StoreError as e:
        logger.error(
            "Failed to fetch customer jobs", customer_id=customer_id, error=str(e)
        )
        return failure_response(
            status.HTTP_500_INTERNAL_SERVER_ERROR, "Failed to fetch customer jobs", empty
        )

    return Envelope[CustomerJobsData](data=data)


@router.get("/{customer_id}/jobs/{job_id}", response_model=Envelope[JobDetailData])
async def get_job_detail(
    customer_id: str,
    job_id: str,
    use_case: JobDetailUseCaseDep,
):
    """Full job enrichment with its status timeline."""
    try:
        data = await use_case.execute(
            parse_identifier("customerId", customer_id),
            parse_identifier("jobId", job_id),
        )
    except ValidationError as e:
        logger.warning("Invalid identifier", customer_id=customer_id, job_id=job_id)
        return failure_response(status.HTTP_400_BAD_REQUEST, str(e))
    except NotFoundError as e:
        logger.info("Job not found", customer_id=customer_id, job_id=job_id)
        return failure_response(status.HTTP_404_NOT_FOUND, str(e))
    except StoreError as e:
        logger.error("Failed to fetch job detail", job_id=job_id, error=str(e))
        return failure_response(
            status.HTTP_500_INTERNAL_SERVER_ERROR, "Failed to fetch job detail"
        )

    return Envelope[JobDetailData](data=data)
