"""
Database models package.
"""

from .base import Base, BaseModel
from .customer import CustomerModel
from .customer_review import CustomerReviewModel
from .job import JobModel
from .job_location import JobLocationModel
from .job_status_history import JobStatusHistoryModel
from .metric_snapshot import MetricSnapshotModel
from .technician import TechnicianProfileModel, job_technicians, review_technicians

__all__ = [
    "Base",
    "BaseModel",
    "CustomerModel",
    "CustomerReviewModel",
    "JobLocationModel",
    "JobModel",
    "JobStatusHistoryModel",
    "MetricSnapshotModel",
    "TechnicianProfileModel",
    "job_technicians",
    "review_technicians",
]
