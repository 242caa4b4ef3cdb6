"""
Job location SQLAlchemy model.
"""

from sqlalchemy import JSON, Column, ForeignKey, String, Uuid
from sqlalchemy.orm import relationship

from .base import BaseModel


class JobLocationModel(BaseModel):
    """Job location database model."""

    __tablename__ = "job_locations"

    name = Column(String(255))
    status = Column(String(50))
    type = Column(String(50))

    # Address fields
    address = Column(String(500))
    sub_district = Column(String(100))
    district = Column(String(100), index=True)
    province = Column(String(100), index=True)
    postal_code = Column(String(10))

    # On-site contact
    contact_first_name = Column(String(100))
    contact_last_name = Column(String(100))
    contact_phone = Column(String(50))

    customer_id = Column(Uuid, ForeignKey("customers.id"), nullable=True, index=True)
    coordinates = Column(JSON, nullable=False, default=lambda: [0, 0])  # [lon, lat]

    # Relationships
    customer = relationship("CustomerModel", back_populates="locations")
    jobs = relationship("JobModel", back_populates="location")

    def __repr__(self) -> str:
        return f"<JobLocation(id={self.id}, name={self.name})>"
