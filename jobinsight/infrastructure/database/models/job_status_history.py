"""
Job status history SQLAlchemy model.
"""

from sqlalchemy import Column, ForeignKey, String, Uuid
from sqlalchemy.orm import relationship

from .base import BaseModel


class JobStatusHistoryModel(BaseModel):
    """Persisted job status change."""

    __tablename__ = "job_status_history"

    job_id = Column(
        Uuid, ForeignKey("jobs.id", ondelete="CASCADE"), nullable=False, index=True
    )
    status = Column(String(50), nullable=False)
    created_by_name = Column(String(255))

    # Relationships
    job = relationship("JobModel", back_populates="status_history")

    def __repr__(self) -> str:
        return f"<JobStatusHistory(job_id={self.job_id}, status={self.status})>"
