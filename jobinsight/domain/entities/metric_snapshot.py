"""
Metric snapshot domain entity.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, Optional

from jobinsight.domain.value_objects.date_window import DateWindow
from jobinsight.domain.value_objects.metric_type import MetricType

SNAPSHOT_SCHEMA_VERSION = 1


@dataclass
class MetricSnapshot:
    """Precomputed overview aggregate for a fixed window."""

    metric_type: MetricType
    date: datetime
    period: DateWindow
    payload: Dict[str, Any]
    schema_version: int = SNAPSHOT_SCHEMA_VERSION
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @property
    def is_current_schema(self) -> bool:
        return self.schema_version == SNAPSHOT_SCHEMA_VERSION
