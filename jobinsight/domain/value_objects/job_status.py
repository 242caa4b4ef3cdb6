"""
Job status value object.
"""

from enum import Enum
from typing import Optional


class JobStatus(str, Enum):
    """Job lifecycle status enumeration."""

    WAITINGJOB = "WAITINGJOB"
    WORKING = "WORKING"
    PENDING = "PENDING"
    COMPLETED = "COMPLETED"
    CLOSED = "CLOSED"
    CANCELLED = "CANCELLED"
    REVIEW = "REVIEW"

    def is_closed(self) -> bool:
        """Check if status counts as closed for reporting."""
        return self in CLOSURE_STATUSES


CLOSURE_STATUSES = frozenset(
    {JobStatus.COMPLETED, JobStatus.CLOSED, JobStatus.CANCELLED, JobStatus.REVIEW}
)

# Plain string values, for use in store predicates
CLOSURE_STATUS_VALUES = tuple(sorted(status.value for status in CLOSURE_STATUSES))


def is_closure_status(status: Optional[str]) -> bool:
    """Check a raw status value against the closure set."""
    return status in CLOSURE_STATUS_VALUES
