"""
Canonical filter descriptor value objects.
"""

from dataclasses import dataclass, field
from typing import Optional, Tuple
from uuid import UUID

from .date_window import DateWindow


@dataclass(frozen=True)
class PageRequest:
    """1-based page request."""

    page: int = 1
    limit: int = 10

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


@dataclass(frozen=True)
class TeamLeaderMatch:
    """Case-insensitive substring match against technician names."""

    first_name: str
    last_name: str = ""


@dataclass(frozen=True)
class JobFilter:
    """Normalized, default-applied filtering and pagination intent."""

    window: Optional[DateWindow] = None
    status: Optional[str] = None
    type: Optional[str] = None
    priority: Optional[str] = None
    province: Optional[str] = None
    provinces: Tuple[str, ...] = ()
    team_leader: Optional[TeamLeaderMatch] = None
    technician_ids: Tuple[UUID, ...] = ()
    customer_id: Optional[UUID] = None
    job_id: Optional[UUID] = None
    search: Optional[str] = None
    page: PageRequest = field(default_factory=PageRequest)
    window_defaulted: bool = False

    def has_categorical_filters(self) -> bool:
        """Check whether anything beyond the date window constrains rows."""
        return any(
            [
                self.status,
                self.type,
                self.priority,
                self.province,
                self.provinces,
                self.team_leader,
                self.technician_ids,
                self.customer_id,
                self.job_id,
                self.search,
            ]
        )

    def needs_location(self) -> bool:
        """Check whether a predicate reads location columns."""
        return bool(self.province or self.provinces or self.customer_id)
