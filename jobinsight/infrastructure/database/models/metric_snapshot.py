"""
Metric snapshot SQLAlchemy model.
"""

from sqlalchemy import JSON, Column, DateTime, Integer, String, UniqueConstraint

from .base import BaseModel


class MetricSnapshotModel(BaseModel):
    """Precomputed overview snapshot keyed by (metric_type, date)."""

    __tablename__ = "metric_snapshots"
    __table_args__ = (
        UniqueConstraint("metric_type", "date", name="uq_metric_snapshots_type_date"),
    )

    metric_type = Column(String(20), nullable=False, index=True)
    date = Column(DateTime, nullable=False, index=True)
    schema_version = Column(Integer, nullable=False, default=1)
    period_start = Column(DateTime, nullable=False)
    period_end = Column(DateTime, nullable=False)
    payload = Column(JSON, nullable=False)

    def __repr__(self) -> str:
        return f"<MetricSnapshot(metric_type={self.metric_type}, date={self.date})>"
