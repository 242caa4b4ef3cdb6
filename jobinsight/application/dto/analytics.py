"""
Analytics response models.
"""

import math
from typing import Dict, List, Optional

from pydantic import Field

from jobinsight.domain.value_objects.job_filter import PageRequest

from .base import CamelModel, Timestamp


class Pagination(CamelModel):
    """Page metadata; ``pages`` is ceil(total / limit)."""

    total: int = 0
    page: int = 1
    limit: int = 10
    pages: int = 0

    @classmethod
    def of(cls, total: int, page: PageRequest) -> "Pagination":
        return cls(
            total=total,
            page=page.page,
            limit=page.limit,
            pages=math.ceil(total / page.limit) if page.limit else 0,
        )


class CustomerContact(CamelModel):
    name: str = "N/A"
    phone: str = ""
    email: str = ""


class LocationView(CamelModel):
    name: Optional[str] = None
    province: Optional[str] = None
    district: Optional[str] = None
    address: Optional[str] = None
    coordinates: Optional[List[float]] = None


class JobRow(CamelModel):
    """Denormalized job listing row."""

    id: str
    job_no: Optional[str] = None
    status: Optional[str] = None
    type: Optional[str] = None
    priority: Optional[str] = None
    created_at: Optional[Timestamp] = None
    updated_at: Optional[Timestamp] = None
    appointment_time: Optional[Timestamp] = None
    close_time: Optional[Timestamp] = None
    customer_contact: CustomerContact = Field(default_factory=CustomerContact)
    location: LocationView = Field(default_factory=LocationView)
    technician_names: str = "N/A"
    technician_count: int = 0


class DistributionEntry(CamelModel):
    """Count of jobs sharing one key; the key is null when unknown."""

    id: Optional[str] = Field(default=None, alias="_id")
    count: int


class OverviewMetrics(CamelModel):
    total_jobs: int = 0
    open_jobs: int = 0
    closed_jobs: int = 0
    today_jobs: int = 0
    today_closed: int = 0


class Distributions(CamelModel):
    status: List[DistributionEntry] = Field(default_factory=list)
    priority: List[DistributionEntry] = Field(default_factory=list)
    province: List[DistributionEntry] = Field(default_factory=list)
    district: List[DistributionEntry] = Field(default_factory=list)


class OverviewData(CamelModel):
    """Overview payload, returned live and stored in metric snapshots."""

    jobs: List[JobRow] = Field(default_factory=list)
    pagination: Pagination = Field(default_factory=Pagination)
    metrics: OverviewMetrics = Field(default_factory=OverviewMetrics)
    distributions: Distributions = Field(default_factory=Distributions)

    @classmethod
    def empty(cls, limit: int = 10) -> "OverviewData":
        return cls(pagination=Pagination(limit=limit))


class MapLocation(CamelModel):
    name: Optional[str] = None
    province: Optional[str] = None
    district: Optional[str] = None
    coordinates: List[float]


class MapPoint(CamelModel):
    """Job plotted on the map; only built for valid coordinates."""

    id: str
    job_no: Optional[str] = None
    status: Optional[str] = None
    type: Optional[str] = None
    priority: Optional[str] = None
    created_at: Optional[Timestamp] = None
    appointment_time: Optional[Timestamp] = None
    location: MapLocation
    customer_name: str = "N/A"
    technician_names: str = "N/A"
    lon: float
    lat: float


class TechnicianPerformanceSummary(CamelModel):
    technician_id: str
    technician_name: str
    avg_time: Optional[float] = None
    avg_manner: Optional[float] = None
    avg_knowledge: Optional[float] = None
    avg_overall: Optional[float] = None
    avg_recommend: Optional[float] = None
    review_count: int = 0


class RecentReview(CamelModel):
    """One reviewed technician of a recent review."""

    id: str
    job_no: Optional[str] = None
    technician_id: str
    technician_name: str
    time: Optional[float] = None
    manner: Optional[float] = None
    knowledge: Optional[float] = None
    overall: Optional[float] = None
    recommend: Optional[float] = None
    comment: Optional[str] = None
    created_at: Optional[Timestamp] = None


class TechnicianPerformanceData(CamelModel):
    performance_summary: List[TechnicianPerformanceSummary] = Field(
        default_factory=list
    )
    recent_reviews: List[RecentReview] = Field(default_factory=list)


class LocationSample(CamelModel):
    job_no: Optional[str] = None
    status: Optional[str] = None
    coordinates: List[float]


class ProvinceData(CamelModel):
    province: Optional[str] = None
    count: int
    location_sample: List[LocationSample] = Field(default_factory=list)


class DistrictCount(CamelModel):
    name: Optional[str] = None
    count: int


class DistrictBreakdown(CamelModel):
    province: Optional[str] = None
    districts: List[DistrictCount] = Field(default_factory=list)
    total_count: int = 0


class StatusCount(CamelModel):
    status: Optional[str] = None
    count: int


class ProvinceStatus(CamelModel):
    province: Optional[str] = None
    statuses: List[StatusCount] = Field(default_factory=list)
    total: int = 0


class GeographicData(CamelModel):
    province_data: List[ProvinceData] = Field(default_factory=list)
    district_breakdown: List[DistrictBreakdown] = Field(default_factory=list)
    status_by_province: List[ProvinceStatus] = Field(default_factory=list)


class TechnicianJobsSummary(CamelModel):
    total_jobs: int = 0
    status_counts: Dict[str, int] = Field(default_factory=dict)
    type_counts: Dict[str, int] = Field(default_factory=dict)
    priority_counts: Dict[str, int] = Field(default_factory=dict)


class TechnicianJobsData(CamelModel):
    jobs: List[JobRow] = Field(default_factory=list)
    pagination: Pagination = Field(default_factory=Pagination)
    summary: TechnicianJobsSummary = Field(default_factory=TechnicianJobsSummary)

    @classmethod
    def empty(cls, limit: int = 10) -> "TechnicianJobsData":
        return cls(pagination=Pagination(limit=limit))


class TechnicianOption(CamelModel):
    id: str
    first_name: str = ""
    last_name: str = ""
    code: str = ""
    position: str = ""
    full_name: str
    display_name: str


class FilterOptions(CamelModel):
    """Selectable values for the dashboard filters; each list starts with All."""

    statuses: List[str] = Field(default_factory=lambda: ["All"])
    types: List[str] = Field(default_factory=lambda: ["All"])
    priorities: List[str] = Field(default_factory=lambda: ["All"])
    provinces: List[str] = Field(default_factory=lambda: ["All"])
    technicians: List[TechnicianOption] = Field(default_factory=list)
    team_leaders: List[str] = Field(default_factory=lambda: ["All"])
