"""
Metric snapshot type value object.
"""

from enum import Enum


class MetricType(str, Enum):
    """Precomputed snapshot granularity."""

    DAILY = "daily"
    WEEKLY = "weekly"
