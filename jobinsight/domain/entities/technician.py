"""
Technician profile domain entity.
"""

from dataclasses import dataclass
from typing import Optional
from uuid import UUID


@dataclass
class TechnicianProfile:
    """Field technician assigned to jobs."""

    id: UUID
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    code: Optional[str] = None
    position: Optional[str] = None
    status: Optional[str] = None
