"""
Job domain entity.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional
from uuid import UUID

from jobinsight.domain.value_objects.job_status import is_closure_status

from .customer_review import CustomerReview
from .job_location import JobLocation
from .technician import TechnicianProfile


@dataclass
class StatusEvent:
    """Persisted status change of a job."""

    status: str
    created_at: datetime
    created_by_name: Optional[str] = None


@dataclass
class Job:
    """Job aggregate root with its optional related entities."""

    id: UUID
    no: Optional[str]
    status: Optional[str]
    type: Optional[str] = None
    priority: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    appointment_time: Optional[datetime] = None
    contact_first_name: Optional[str] = None
    contact_last_name: Optional[str] = None
    contact_phone: Optional[str] = None
    contact_email: Optional[str] = None
    job_location_id: Optional[UUID] = None
    location: Optional[JobLocation] = None
    technicians: List[TechnicianProfile] = field(default_factory=list)
    review: Optional[CustomerReview] = None
    status_history: List[StatusEvent] = field(default_factory=list)

    @property
    def is_closed(self) -> bool:
        return is_closure_status(self.status)

    @property
    def close_time(self) -> Optional[datetime]:
        """Closure timestamp; only defined for closed jobs."""
        return self.updated_at if self.is_closed else None
