"""
Application response models package.
"""

from .analytics import (
    CustomerContact,
    DistributionEntry,
    DistrictBreakdown,
    DistrictCount,
    Distributions,
    FilterOptions,
    GeographicData,
    JobRow,
    LocationSample,
    LocationView,
    MapLocation,
    MapPoint,
    OverviewData,
    OverviewMetrics,
    Pagination,
    ProvinceData,
    ProvinceStatus,
    RecentReview,
    StatusCount,
    TechnicianJobsData,
    TechnicianJobsSummary,
    TechnicianOption,
    TechnicianPerformanceData,
    TechnicianPerformanceSummary,
)
from .customers import (
    CustomerInfo,
    CustomerJobRow,
    CustomerJobsData,
    CustomerListData,
    CustomerSummary,
    JobDetailData,
    JobDetailLocation,
    JobDetails,
    ReviewInfo,
    TechnicianInfo,
    TimelineEvent,
)

__all__ = [
    "CustomerContact",
    "CustomerInfo",
    "CustomerJobRow",
    "CustomerJobsData",
    "CustomerListData",
    "CustomerSummary",
    "DistributionEntry",
    "DistrictBreakdown",
    "DistrictCount",
    "Distributions",
    "FilterOptions",
    "GeographicData",
    "JobDetailData",
    "JobDetailLocation",
    "JobDetails",
    "JobRow",
    "LocationSample",
    "LocationView",
    "MapLocation",
    "MapPoint",
    "OverviewData",
    "OverviewMetrics",
    "Pagination",
    "ProvinceData",
    "ProvinceStatus",
    "RecentReview",
    "ReviewInfo",
    "StatusCount",
    "TechnicianInfo",
    "TechnicianJobsData",
    "TechnicianJobsSummary",
    "TechnicianOption",
    "TechnicianPerformanceData",
    "TechnicianPerformanceSummary",
    "TimelineEvent",
]
