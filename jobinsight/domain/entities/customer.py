"""
Customer domain entity.
"""

from dataclasses import dataclass
from typing import Optional
from uuid import UUID


@dataclass
class Customer:
    """Customer reached through a job location."""

    id: UUID
    name: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    code: Optional[str] = None
    customer_type: Optional[str] = None
    status: Optional[str] = None
