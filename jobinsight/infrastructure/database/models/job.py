"""
Job SQLAlchemy model.
"""

from sqlalchemy import Column, DateTime, ForeignKey, String, Uuid
from sqlalchemy.orm import relationship

from .base import BaseModel
from .technician import job_technicians


class JobModel(BaseModel):
    """Job database model."""

    __tablename__ = "jobs"

    no = Column(String(50), unique=True, nullable=False)
    status = Column(String(50), nullable=False, index=True)
    type = Column(String(50), index=True)
    priority = Column(String(50), index=True)
    appointment_time = Column(DateTime)

    # Raw customer contact, used when the location has no customer
    contact_first_name = Column(String(100))
    contact_last_name = Column(String(100))
    contact_phone = Column(String(50))
    contact_email = Column(String(255))

    job_location_id = Column(
        Uuid, ForeignKey("job_locations.id"), nullable=True, index=True
    )

    # Relationships
    location = relationship("JobLocationModel", back_populates="jobs")
    technicians = relationship(
        "TechnicianProfileModel",
        secondary=job_technicians,
        back_populates="jobs",
        order_by=job_technicians.c.sequence,
    )
    review = relationship("CustomerReviewModel", back_populates="job", uselist=False)
    status_history = relationship(
        "JobStatusHistoryModel",
        back_populates="job",
        cascade="all, delete-orphan",
        order_by="JobStatusHistoryModel.created_at",
    )

    def __repr__(self) -> str:
        return f"<Job(id={self.id}, no={self.no}, status={self.status})>"
