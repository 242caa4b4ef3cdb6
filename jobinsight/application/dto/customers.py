"""
Customer response models.
"""

from typing import List, Optional

from pydantic import Field

from .analytics import CustomerContact, Pagination
from .base import CamelModel, Timestamp


class CustomerSummary(CamelModel):
    id: str
    code: Optional[str] = None
    name: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    status: Optional[str] = None
    customer_type: Optional[str] = None
    location_name: Optional[str] = None


class CustomerListData(CamelModel):
    customers: List[CustomerSummary] = Field(default_factory=list)
    pagination: Pagination = Field(default_factory=Pagination)

    @classmethod
    def empty(cls, limit: int = 20) -> "CustomerListData":
        return cls(pagination=Pagination(limit=limit))


class CustomerJobRow(CamelModel):
    id: str
    job_no: Optional[str] = None
    status: Optional[str] = None
    type: Optional[str] = None
    priority: Optional[str] = None
    created_at: Optional[Timestamp] = None
    updated_at: Optional[Timestamp] = None
    appointment_time: Optional[Timestamp] = None
    close_time: Optional[Timestamp] = None
    location_name: Optional[str] = None
    location_province: Optional[str] = None
    location_district: Optional[str] = None
    technician_names: str = "N/A"
    review_score: Optional[float] = None


class CustomerJobsData(CamelModel):
    jobs: List[CustomerJobRow] = Field(default_factory=list)
    pagination: Pagination = Field(default_factory=Pagination)

    @classmethod
    def empty(cls, limit: int = 10) -> "CustomerJobsData":
        return cls(pagination=Pagination(limit=limit))


class CustomerInfo(CamelModel):
    name: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None


class JobDetailLocation(CamelModel):
    name: Optional[str] = None
    province: Optional[str] = None
    district: Optional[str] = None
    address: Optional[str] = None
    contact_name: str = ""
    contact_phone: Optional[str] = None
    coordinates: Optional[List[float]] = None


class TechnicianInfo(CamelModel):
    id: str
    name: str
    code: Optional[str] = None
    position: Optional[str] = None


class ReviewInfo(CamelModel):
    time: Optional[float] = None
    manner: Optional[float] = None
    knowledge: Optional[float] = None
    overall: Optional[float] = None
    recommend: Optional[float] = None
    comment: Optional[str] = None


class JobDetails(CamelModel):
    id: str
    job_no: Optional[str] = None
    status: Optional[str] = None
    type: Optional[str] = None
    priority: Optional[str] = None
    created_at: Optional[Timestamp] = None
    updated_at: Optional[Timestamp] = None
    appointment_time: Optional[Timestamp] = None
    close_time: Optional[Timestamp] = None
    customer: Optional[CustomerInfo] = None
    customer_contact: CustomerContact = Field(default_factory=CustomerContact)
    location: JobDetailLocation = Field(default_factory=JobDetailLocation)
    technicians: List[TechnicianInfo] = Field(default_factory=list)
    technician_names: str = "N/A"
    review: Optional[ReviewInfo] = None


class TimelineEvent(CamelModel):
    status: str
    timestamp: Optional[Timestamp] = None
    by: str = "System"


class JobDetailData(CamelModel):
    job_details: JobDetails
    timeline: List[TimelineEvent] = Field(default_factory=list)
