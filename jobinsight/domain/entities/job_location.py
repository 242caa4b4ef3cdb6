"""
Job location domain entity.
"""

from dataclasses import dataclass, field
from typing import Any, List, Optional
from uuid import UUID

from .customer import Customer


@dataclass
class JobLocation:
    """Site where a job is performed."""

    id: UUID
    name: Optional[str] = None
    address: Optional[str] = None
    sub_district: Optional[str] = None
    district: Optional[str] = None
    province: Optional[str] = None
    postal_code: Optional[str] = None
    contact_first_name: Optional[str] = None
    contact_last_name: Optional[str] = None
    contact_phone: Optional[str] = None
    customer_id: Optional[UUID] = None
    # [longitude, latitude]; [0, 0] when never set
    coordinates: List[Any] = field(default_factory=lambda: [0, 0])
    customer: Optional[Customer] = None
