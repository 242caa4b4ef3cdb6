"""
Database infrastructure package.
"""

from .executor import JoinAggregateExecutor
from .repositories import MetricSnapshotRepository

__all__ = ["JoinAggregateExecutor", "MetricSnapshotRepository"]
