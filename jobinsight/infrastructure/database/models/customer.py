"""
Customer SQLAlchemy model.
"""

from sqlalchemy import Column, String
from sqlalchemy.orm import relationship

from .base import BaseModel


class CustomerModel(BaseModel):
    """Customer database model."""

    __tablename__ = "customers"

    code = Column(String(50), index=True)
    customer_type = Column(String(50))
    name = Column(String(255), index=True)
    phone = Column(String(50))
    email = Column(String(255))
    status = Column(String(50))

    # Relationships
    locations = relationship("JobLocationModel", back_populates="customer")

    def __repr__(self) -> str:
        return f"<Customer(id={self.id}, name={self.name})>"
