"""
Named analytics operations.

Every analytic shape the service answers is a fixed operation described by an
``OperationDescriptor``: the root entity, the canonical filter, the related
entities to join, an optional grouping and an ordering. The record store runs
descriptors; it never receives ad hoc queries.
"""

from dataclasses import dataclass, replace
from enum import Enum
from typing import FrozenSet, Optional, Tuple

from jobinsight.domain.value_objects.date_window import DateWindow
from jobinsight.domain.value_objects.job_filter import JobFilter, PageRequest

TOP_N = 10
RECENT_REVIEW_LIMIT = 50
LOCATION_SAMPLE_SIZE = 5
SAMPLE_SCAN_PAGE_SIZE = 200


class RootEntity(str, Enum):
    """Entity an operation iterates over."""

    JOB = "job"
    REVIEW = "review"
    CUSTOMER = "customer"
    TECHNICIAN = "technician"


class Join(str, Enum):
    """Related entity attached to each root row."""

    LOCATION = "location"
    CUSTOMER = "customer"
    TECHNICIANS = "technicians"
    REVIEW = "review"
    STATUS_HISTORY = "status_history"


class Dimension(str, Enum):
    """Grouping key."""

    STATUS = "status"
    TYPE = "type"
    PRIORITY = "priority"
    PROVINCE = "province"
    DISTRICT = "district"
    TECHNICIAN = "technician"


class Ordering(str, Enum):
    CREATED_DESC = "created_desc"
    NAME_ASC = "name_asc"
    COUNT_DESC = "count_desc"
    OVERALL_DESC = "overall_desc"


@dataclass(frozen=True)
class Grouping:
    """Count per key, optionally with per-key rating averages."""

    dimensions: Tuple[Dimension, ...]
    ratings: bool = False
    top_n: Optional[int] = None


@dataclass(frozen=True)
class OperationDescriptor:
    """Fixed description of one store computation."""

    name: str
    root: RootEntity
    filter: JobFilter
    joins: FrozenSet[Join] = frozenset()
    grouping: Optional[Grouping] = None
    ordering: Ordering = Ordering.CREATED_DESC
    page: Optional[PageRequest] = None
    limit: Optional[int] = None

    def has_join(self, join: Join) -> bool:
        return join in self.joins

    def needs_location(self) -> bool:
        """Check whether the location must be joined to the root job."""
        if self.root != RootEntity.JOB:
            return False
        if self.filter.needs_location():
            return True
        if Join.LOCATION in self.joins or Join.CUSTOMER in self.joins:
            return True
        if self.grouping is not None:
            return any(
                d in (Dimension.PROVINCE, Dimension.DISTRICT)
                for d in self.grouping.dimensions
            )
        return False


JOB_ROW_JOINS = frozenset({Join.LOCATION, Join.CUSTOMER, Join.TECHNICIANS})


def job_page(name: str, job_filter: JobFilter) -> OperationDescriptor:
    """Newest-first page of enriched job rows."""
    return OperationDescriptor(
        name=name,
        root=RootEntity.JOB,
        filter=job_filter,
        joins=JOB_ROW_JOINS,
        page=job_filter.page,
    )


def job_count(name: str, job_filter: JobFilter) -> OperationDescriptor:
    return OperationDescriptor(name=name, root=RootEntity.JOB, filter=job_filter)


def job_distribution(
    name: str,
    job_filter: JobFilter,
    *dimensions: Dimension,
    top_n: Optional[int] = None,
) -> OperationDescriptor:
    """Count of jobs per key, descending by count."""
    return OperationDescriptor(
        name=name,
        root=RootEntity.JOB,
        filter=job_filter,
        grouping=Grouping(dimensions=tuple(dimensions), top_n=top_n),
        ordering=Ordering.COUNT_DESC,
    )


def within_window(job_filter: JobFilter, window: DateWindow) -> JobFilter:
    """Same categorical filter, different date window."""
    return replace(job_filter, window=window, window_defaulted=False)


def map_points(job_filter: JobFilter) -> OperationDescriptor:
    return OperationDescriptor(
        name="map_data",
        root=RootEntity.JOB,
        filter=job_filter,
        joins=JOB_ROW_JOINS,
    )


def technician_performance(job_filter: JobFilter) -> OperationDescriptor:
    """Per-technician rating averages over reviews in the window."""
    return OperationDescriptor(
        name="technician_performance",
        root=RootEntity.REVIEW,
        filter=job_filter,
        grouping=Grouping(dimensions=(Dimension.TECHNICIAN,), ratings=True),
        ordering=Ordering.OVERALL_DESC,
    )


def recent_reviews(job_filter: JobFilter) -> OperationDescriptor:
    return OperationDescriptor(
        name="recent_reviews",
        root=RootEntity.REVIEW,
        filter=job_filter,
        joins=frozenset({Join.TECHNICIANS}),
        limit=RECENT_REVIEW_LIMIT,
    )


def location_samples(
    job_filter: JobFilter, provinces: Tuple[str, ...], page: int
) -> OperationDescriptor:
    """One page of the newest located jobs across the given provinces."""
    return OperationDescriptor(
        name="location_samples",
        root=RootEntity.JOB,
        filter=replace(job_filter, provinces=provinces),
        joins=frozenset({Join.LOCATION}),
        page=PageRequest(page=page, limit=SAMPLE_SCAN_PAGE_SIZE),
    )


def customer_page(job_filter: JobFilter) -> OperationDescriptor:
    return OperationDescriptor(
        name="customer_list",
        root=RootEntity.CUSTOMER,
        filter=job_filter,
        ordering=Ordering.NAME_ASC,
        page=job_filter.page,
    )


def customer_count(job_filter: JobFilter) -> OperationDescriptor:
    return OperationDescriptor(
        name="customer_list", root=RootEntity.CUSTOMER, filter=job_filter
    )


def customer_jobs(job_filter: JobFilter) -> OperationDescriptor:
    return OperationDescriptor(
        name="customer_jobs",
        root=RootEntity.JOB,
        filter=job_filter,
        joins=frozenset({Join.LOCATION, Join.TECHNICIANS, Join.REVIEW}),
        page=job_filter.page,
    )


def job_detail(job_filter: JobFilter) -> OperationDescriptor:
    return OperationDescriptor(
        name="job_detail",
        root=RootEntity.JOB,
        filter=job_filter,
        joins=frozenset(
            {
                Join.LOCATION,
                Join.CUSTOMER,
                Join.TECHNICIANS,
                Join.REVIEW,
                Join.STATUS_HISTORY,
            }
        ),
        limit=1,
    )


def technician_roster() -> OperationDescriptor:
    return OperationDescriptor(
        name="filter_options",
        root=RootEntity.TECHNICIAN,
        filter=JobFilter(),
        ordering=Ordering.NAME_ASC,
    )
