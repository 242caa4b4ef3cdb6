"""
Customer review domain entity.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional
from uuid import UUID

from .technician import TechnicianProfile

RATING_FIELDS = ("time", "manner", "knowledge", "overall", "recommend")


@dataclass
class CustomerReview:
    """Post-job review; at most one per job."""

    id: UUID
    job_id: Optional[UUID] = None
    time: Optional[float] = None
    manner: Optional[float] = None
    knowledge: Optional[float] = None
    overall: Optional[float] = None
    recommend: Optional[float] = None
    comment: Optional[str] = None
    created_at: Optional[datetime] = None
    job_no: Optional[str] = None
    technicians: List[TechnicianProfile] = field(default_factory=list)
