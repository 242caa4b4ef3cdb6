"""
Technician profile SQLAlchemy models.
"""

from sqlalchemy import Column, ForeignKey, Integer, String, Table, Uuid
from sqlalchemy.orm import relationship

from .base import Base, BaseModel

job_technicians = Table(
    "job_technicians",
    Base.metadata,
    Column("job_id", Uuid, ForeignKey("jobs.id", ondelete="CASCADE"), primary_key=True),
    Column(
        "technician_id",
        Uuid,
        ForeignKey("technician_profiles.id", ondelete="CASCADE"),
        primary_key=True,
    ),
    Column("sequence", Integer, nullable=False, default=0),
)

review_technicians = Table(
    "review_technicians",
    Base.metadata,
    Column(
        "review_id",
        Uuid,
        ForeignKey("customer_reviews.id", ondelete="CASCADE"),
        primary_key=True,
    ),
    Column(
        "technician_id",
        Uuid,
        ForeignKey("technician_profiles.id", ondelete="CASCADE"),
        primary_key=True,
    ),
)


class TechnicianProfileModel(BaseModel):
    """Technician profile database model."""

    __tablename__ = "technician_profiles"

    code = Column(String(50), index=True)
    type = Column(String(50))
    status = Column(String(50))
    first_name = Column(String(100))
    last_name = Column(String(100))
    position = Column(String(100))

    # Relationships
    jobs = relationship(
        "JobModel", secondary=job_technicians, back_populates="technicians"
    )

    def __repr__(self) -> str:
        return f"<TechnicianProfile(id={self.id}, code={self.code})>"
