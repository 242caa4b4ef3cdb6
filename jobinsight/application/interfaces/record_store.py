"""
Record store interfaces for dependency inversion.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional, Tuple
from uuid import UUID

from jobinsight.application.operations import OperationDescriptor
from jobinsight.domain.entities import (
    Customer,
    CustomerReview,
    Job,
    MetricSnapshot,
    TechnicianProfile,
)
from jobinsight.domain.value_objects.metric_type import MetricType


@dataclass
class GroupRow:
    """One group of an aggregate: its key values, row count and averages."""

    keys: Tuple[Any, ...]
    count: int
    averages: Dict[str, Optional[float]] = field(default_factory=dict)


@dataclass
class CustomerRecord:
    """Customer with the name of its first location."""

    customer: Customer
    location_name: Optional[str] = None


class RecordStoreInterface(ABC):
    """Runs operation descriptors against the job record store."""

    @abstractmethod
    async def fetch_jobs(self, op: OperationDescriptor) -> List[Job]:
        """Fetch job rows with the related entities the operation joins."""
        pass

    @abstractmethod
    async def fetch_reviews(self, op: OperationDescriptor) -> List[CustomerReview]:
        """Fetch reviews, newest first."""
        pass

    @abstractmethod
    async def fetch_customers(self, op: OperationDescriptor) -> List[CustomerRecord]:
        """Fetch customers ordered by name."""
        pass

    @abstractmethod
    async def fetch_technicians(
        self, op: OperationDescriptor
    ) -> List[TechnicianProfile]:
        """Fetch technician profiles ordered by name."""
        pass

    @abstractmethod
    async def customer_exists(self, customer_id: UUID) -> bool:
        """Check whether a customer exists."""
        pass

    @abstractmethod
    async def count(self, op: OperationDescriptor) -> int:
        """Count root rows matching the operation's predicate."""
        pass

    @abstractmethod
    async def group(self, op: OperationDescriptor) -> List[GroupRow]:
        """Run the operation's grouping."""
        pass


class MetricSnapshotRepositoryInterface(ABC):
    """Metrics cache repository interface."""

    @abstractmethod
    async def upsert(self, snapshot: MetricSnapshot) -> MetricSnapshot:
        """Insert or replace the snapshot keyed by (metric_type, date)."""
        pass

    @abstractmethod
    async def get(
        self, metric_type: MetricType, date: datetime
    ) -> Optional[MetricSnapshot]:
        """Get the snapshot for an exact key."""
        pass

    @abstractmethod
    async def find_latest(
        self, metric_type: MetricType, not_before: datetime
    ) -> Optional[MetricSnapshot]:
        """Get the most recent snapshot whose anchor is at or after ``not_before``."""
        pass

    @abstractmethod
    async def commit(self) -> None:
        """Commit pending writes."""
        pass
