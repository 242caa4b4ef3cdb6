"""
Domain value objects package.
"""

from .date_window import DateWindow
from .job_filter import JobFilter, PageRequest, TeamLeaderMatch
from .job_status import CLOSURE_STATUS_VALUES, CLOSURE_STATUSES, JobStatus, is_closure_status
from .metric_type import MetricType

__all__ = [
    "CLOSURE_STATUSES",
    "CLOSURE_STATUS_VALUES",
    "DateWindow",
    "JobFilter",
    "JobStatus",
    "MetricType",
    "PageRequest",
    "TeamLeaderMatch",
    "is_closure_status",
]
