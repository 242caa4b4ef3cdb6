"""
Application use cases package.
"""

from .get_customer_jobs import GetCustomerJobsUseCase
from .get_filter_options import GetFilterOptionsUseCase
from .get_geographic import GetGeographicUseCase
from .get_job_detail import GetJobDetailUseCase
from .get_map_data import GetMapDataUseCase
from .get_overview import GetOverviewUseCase, OverviewResult
from .get_technician_jobs import GetTechnicianJobsUseCase
from .get_technician_performance import GetTechnicianPerformanceUseCase
from .list_customers import ListCustomersUseCase
from .precompute_metrics import PrecomputeMetricsUseCase

__all__ = [
    "GetCustomerJobsUseCase",
    "GetFilterOptionsUseCase",
    "GetGeographicUseCase",
    "GetJobDetailUseCase",
    "GetMapDataUseCase",
    "GetOverviewUseCase",
    "GetTechnicianJobsUseCase",
    "GetTechnicianPerformanceUseCase",
    "ListCustomersUseCase",
    "OverviewResult",
    "PrecomputeMetricsUseCase",
]
