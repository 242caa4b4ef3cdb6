"""
Database repositories package.
"""

from .metric_snapshot_repository import MetricSnapshotRepository

__all__ = ["MetricSnapshotRepository"]
