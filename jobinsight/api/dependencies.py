"""
FastAPI dependency injection container.
"""

from datetime import datetime
from typing import Annotated, Callable, Optional

from fastapi import Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from jobinsight.application.services.cache_resolver import CacheResolver
from jobinsight.application.services.filter_normalizer import (
    FilterNormalizer,
    RawFilterParams,
)
from jobinsight.application.services.overview_aggregation import OverviewAggregation
from jobinsight.application.services.result_formatter import ResultFormatter
from jobinsight.application.use_cases import (
    GetCustomerJobsUseCase,
    GetFilterOptionsUseCase,
    GetGeographicUseCase,
    GetJobDetailUseCase,
    GetMapDataUseCase,
    GetOverviewUseCase,
    GetTechnicianJobsUseCase,
    GetTechnicianPerformanceUseCase,
    ListCustomersUseCase,
)
from jobinsight.config.database import get_db_session
from jobinsight.config.settings import settings
from jobinsight.domain.value_objects.date_window import utcnow
from jobinsight.infrastructure.database.executor import JoinAggregateExecutor
from jobinsight.infrastructure.database.repositories.metric_snapshot_repository import (
    MetricSnapshotRepository,
)


def get_clock() -> Callable[[], datetime]:
    """Wall clock returning naive UTC; overridden in tests."""
    return utcnow


ClockDep = Annotated[Callable[[], datetime], Depends(get_clock)]


# Database Dependencies
async def get_record_store(
    db: AsyncSession = Depends(get_db_session),
) -> JoinAggregateExecutor:
    """Get join-aggregate executor instance."""
    return JoinAggregateExecutor(db)


async def get_snapshot_repository(
    db: AsyncSession = Depends(get_db_session),
) -> MetricSnapshotRepository:
    """Get metric snapshot repository instance."""
    return MetricSnapshotRepository(db)


RecordStoreDep = Annotated[JoinAggregateExecutor, Depends(get_record_store)]
SnapshotRepositoryDep = Annotated[
    MetricSnapshotRepository, Depends(get_snapshot_repository)
]


# Service Dependencies
async def get_result_formatter() -> ResultFormatter:
    return ResultFormatter()


async def get_filter_normalizer(clock: ClockDep) -> FilterNormalizer:
    return FilterNormalizer(
        tz=settings.reporting_tz,
        default_window_days=settings.DEFAULT_WINDOW_DAYS,
        default_limit=settings.DEFAULT_PAGE_LIMIT,
        max_limit=settings.MAX_PAGE_LIMIT,
        export_threshold=settings.EXPORT_LIMIT_THRESHOLD,
        clock=clock,
    )


ResultFormatterDep = Annotated[ResultFormatter, Depends(get_result_formatter)]
FilterNormalizerDep = Annotated[FilterNormalizer, Depends(get_filter_normalizer)]


async def get_cache_resolver(
    snapshot_repo: SnapshotRepositoryDep, clock: ClockDep
) -> CacheResolver:
    return CacheResolver(
        snapshot_repo,
        tz=settings.reporting_tz,
        default_limit=settings.DEFAULT_PAGE_LIMIT,
        clock=clock,
    )


async def get_overview_aggregation(
    record_store: RecordStoreDep, formatter: ResultFormatterDep
) -> OverviewAggregation:
    return OverviewAggregation(record_store, formatter)


CacheResolverDep = Annotated[CacheResolver, Depends(get_cache_resolver)]
OverviewAggregationDep = Annotated[
    OverviewAggregation, Depends(get_overview_aggregation)
]


# Query parameters
async def get_filter_params(
    start_date: Optional[str] = Query(None, alias="startDate"),
    end_date: Optional[str] = Query(None, alias="endDate"),
    status: Optional[str] = Query(None),
    type: Optional[str] = Query(None),
    priority: Optional[str] = Query(None),
    province: Optional[str] = Query(None),
    team_leader: Optional[str] = Query(None, alias="teamLeader"),
    technician_id: Optional[str] = Query(None, alias="technicianId"),
    technician_ids: Optional[str] = Query(None, alias="technicianIds"),
    search: Optional[str] = Query(None),
    page: Optional[str] = Query(None),
    limit: Optional[str] = Query(None),
) -> RawFilterParams:
    """Raw query parameters; page and limit stay strings so bad input defaults."""
    return RawFilterParams(
        start_date=start_date,
        end_date=end_date,
        status=status,
        type=type,
        priority=priority,
        province=province,
        team_leader=team_leader,
        technician_id=technician_id,
        technician_ids=technician_ids,
        search=search,
        page=page,
        limit=limit,
    )


FilterParamsDep = Annotated[RawFilterParams, Depends(get_filter_params)]


# Use Case Dependencies
async def get_overview_use_case(
    aggregation: OverviewAggregationDep,
    cache_resolver: CacheResolverDep,
    clock: ClockDep,
) -> GetOverviewUseCase:
    return GetOverviewUseCase(
        aggregation, cache_resolver, tz=settings.reporting_tz, clock=clock
    )


async def get_map_data_use_case(
    record_store: RecordStoreDep, formatter: ResultFormatterDep
) -> GetMapDataUseCase:
    return GetMapDataUseCase(record_store, formatter)


async def get_filter_options_use_case(
    record_store: RecordStoreDep, formatter: ResultFormatterDep
) -> GetFilterOptionsUseCase:
    return GetFilterOptionsUseCase(record_store, formatter)


async def get_technician_performance_use_case(
    record_store: RecordStoreDep, formatter: ResultFormatterDep
) -> GetTechnicianPerformanceUseCase:
    return GetTechnicianPerformanceUseCase(record_store, formatter)


async def get_geographic_use_case(
    record_store: RecordStoreDep, formatter: ResultFormatterDep
) -> GetGeographicUseCase:
    return GetGeographicUseCase(record_store, formatter)


async def get_technician_jobs_use_case(
    record_store: RecordStoreDep, formatter: ResultFormatterDep
) -> GetTechnicianJobsUseCase:
    return GetTechnicianJobsUseCase(record_store, formatter)


async def get_list_customers_use_case(
    record_store: RecordStoreDep, formatter: ResultFormatterDep
) -> ListCustomersUseCase:
    return ListCustomersUseCase(record_store, formatter)


async def get_customer_jobs_use_case(
    record_store: RecordStoreDep, formatter: ResultFormatterDep
) -> GetCustomerJobsUseCase:
    return GetCustomerJobsUseCase(record_store, formatter)


async def get_job_detail_use_case(
    record_store: RecordStoreDep, formatter: ResultFormatterDep
) -> GetJobDetailUseCase:
    return GetJobDetailUseCase(record_store, formatter)


# Type aliases for cleaner dependency injection
OverviewUseCaseDep = Annotated[GetOverviewUseCase, Depends(get_overview_use_case)]
MapDataUseCaseDep = Annotated[GetMapDataUseCase, Depends(get_map_data_use_case)]
FilterOptionsUseCaseDep = Annotated[
    GetFilterOptionsUseCase, Depends(get_filter_options_use_case)
]
TechnicianPerformanceUseCaseDep = Annotated[
    GetTechnicianPerformanceUseCase, Depends(get_technician_performance_use_case)
]
GeographicUseCaseDep = Annotated[GetGeographicUseCase, Depends(get_geographic_use_case)]
TechnicianJobsUseCaseDep = Annotated[
    GetTechnicianJobsUseCase, Depends(get_technician_jobs_use_case)
]
ListCustomersUseCaseDep = Annotated[
    ListCustomersUseCase, Depends(get_list_customers_use_case)
]
CustomerJobsUseCaseDep = Annotated[
    GetCustomerJobsUseCase, Depends(get_customer_jobs_use_case)
]
JobDetailUseCaseDep = Annotated[GetJobDetailUseCase, Depends(get_job_detail_use_case)]
