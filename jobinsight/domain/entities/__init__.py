"""
Domain entities package.
"""

from .customer import Customer
from .customer_review import RATING_FIELDS, CustomerReview
from .job import Job, StatusEvent
from .job_location import JobLocation
from .metric_snapshot import SNAPSHOT_SCHEMA_VERSION, MetricSnapshot
from .technician import TechnicianProfile

__all__ = [
    "Customer",
    "CustomerReview",
    "Job",
    "JobLocation",
    "MetricSnapshot",
    "RATING_FIELDS",
    "SNAPSHOT_SCHEMA_VERSION",
    "StatusEvent",
    "TechnicianProfile",
]
