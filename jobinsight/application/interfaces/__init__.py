"""
Application interfaces package.
"""

from .record_store import (
    CustomerRecord,
    GroupRow,
    MetricSnapshotRepositoryInterface,
    RecordStoreInterface,
)

__all__ = [
    "CustomerRecord",
    "GroupRow",
    "MetricSnapshotRepositoryInterface",
    "RecordStoreInterface",
]
