"""
Customer review SQLAlchemy model.
"""

from sqlalchemy import Column, Float, ForeignKey, Text, Uuid
from sqlalchemy.orm import relationship

from .base import BaseModel
from .technician import review_technicians


class CustomerReviewModel(BaseModel):
    """Customer review database model."""

    __tablename__ = "customer_reviews"

    job_id = Column(Uuid, ForeignKey("jobs.id"), nullable=False, unique=True)

    # Ratings; no scale is enforced
    time = Column(Float)
    manner = Column(Float)
    knowledge = Column(Float)
    overall = Column(Float)
    recommend = Column(Float)
    comment = Column(Text)

    # Relationships
    job = relationship("JobModel", back_populates="review")
    technicians = relationship("TechnicianProfileModel", secondary=review_technicians)

    def __repr__(self) -> str:
        return f"<CustomerReview(id={self.id}, job_id={self.job_id})>"
