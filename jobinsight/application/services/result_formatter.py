"""Result formatting service.

Flattens joined entities, any of which may be missing, into the stable
response shapes. Every operation that shows technician names or customer
contacts goes through the same helpers here.
"""

import math
from collections import defaultdict
from numbers import Real
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple

from jobinsight.application.dto import (
    CustomerContact,
    CustomerInfo,
    CustomerJobRow,
    CustomerSummary,
    DistributionEntry,
    JobDetailData,
    JobDetailLocation,
    JobDetails,
    JobRow,
    LocationView,
    MapLocation,
    MapPoint,
    RecentReview,
    ReviewInfo,
    TechnicianInfo,
    TechnicianOption,
    TechnicianPerformanceSummary,
    TimelineEvent,
)
from jobinsight.application.interfaces.record_store import CustomerRecord, GroupRow
from jobinsight.domain.entities import CustomerReview, Job, TechnicianProfile

NOT_AVAILABLE = "N/A"
UNKNOWN_KEY = "Unknown"
SYSTEM_ACTOR = "System"
CREATED_STATUS = "CREATED"


def _join_name(first: Optional[str], last: Optional[str]) -> str:
    return f"{first or ''} {last or ''}".strip()


def _key(value: Any) -> Optional[str]:
    return None if value is None else str(value)


class ResultFormatter:
    """Builds response rows from store entities."""

    # Shared rules

    def technician_display_name(self, technician: TechnicianProfile) -> str:
        return _join_name(technician.first_name, technician.last_name)

    def technician_names(self, technicians: Iterable[TechnicianProfile]) -> str:
        """Comma-joined display names, or N/A when nobody has a name."""
        names = [self.technician_display_name(t) for t in technicians]
        names = [name for name in names if name]
        return ", ".join(names) if names else NOT_AVAILABLE

    def customer_contact(self, job: Job) -> CustomerContact:
        """Customer reached through the location first, raw job contact second."""
        customer = job.location.customer if job.location else None

        name = customer.name if customer and customer.name else None
        phone = customer.phone if customer and customer.phone else None
        email = customer.email if customer and customer.email else None

        name = name or _join_name(job.contact_first_name, job.contact_last_name)
        phone = phone or job.contact_phone
        email = email or job.contact_email

        return CustomerContact(
            name=name or NOT_AVAILABLE, phone=phone or "", email=email or ""
        )

    def valid_coordinates(self, coordinates: Any) -> Optional[Tuple[float, float]]:
        """Return (lon, lat) when plottable; [0, 0] means unknown."""
        if not isinstance(coordinates, (list, tuple)) or len(coordinates) != 2:
            return None
        lon, lat = coordinates
        for value in (lon, lat):
            if isinstance(value, bool) or not isinstance(value, Real):
                return None
            if not math.isfinite(value):
                return None
        if lon == 0 and lat == 0:
            return None
        return float(lon), float(lat)

    def job_coordinates(self, job: Job) -> Optional[Tuple[float, float]]:
        if job.location is None:
            return None
        return self.valid_coordinates(job.location.coordinates)

    # Row builders

    def job_row(self, job: Job) -> JobRow:
        coordinates = self.job_coordinates(job)
        location = job.location
        return JobRow(
            id=str(job.id),
            job_no=job.no,
            status=job.status,
            type=job.type,
            priority=job.priority,
            created_at=job.created_at,
            updated_at=job.updated_at,
            appointment_time=job.appointment_time,
            close_time=job.close_time,
            customer_contact=self.customer_contact(job),
            location=LocationView(
                name=location.name if location else None,
                province=location.province if location else None,
                district=location.district if location else None,
                address=location.address if location else None,
                coordinates=list(coordinates) if coordinates else None,
            ),
            technician_names=self.technician_names(job.technicians),
            technician_count=len(job.technicians),
        )

    def map_points(self, jobs: Iterable[Job]) -> List[MapPoint]:
        """Map points for jobs with valid coordinates; the rest are dropped."""
        points = []
        for job in jobs:
            coordinates = self.job_coordinates(job)
            if coordinates is None:
                continue
            lon, lat = coordinates
            points.append(
                MapPoint(
                    id=str(job.id),
                    job_no=job.no,
                    status=job.status,
                    type=job.type,
                    priority=job.priority,
                    created_at=job.created_at,
                    appointment_time=job.appointment_time,
                    location=MapLocation(
                        name=job.location.name,
                        province=job.location.province,
                        district=job.location.district,
                        coordinates=[lon, lat],
                    ),
                    customer_name=self.customer_contact(job).name,
                    technician_names=self.technician_names(job.technicians),
                    lon=lon,
                    lat=lat,
                )
            )
        return points

    def customer_job_row(self, job: Job) -> CustomerJobRow:
        location = job.location
        return CustomerJobRow(
            id=str(job.id),
            job_no=job.no,
            status=job.status,
            type=job.type,
            priority=job.priority,
            created_at=job.created_at,
            updated_at=job.updated_at,
            appointment_time=job.appointment_time,
            close_time=job.close_time,
            location_name=location.name if location else None,
            location_province=location.province if location else None,
            location_district=location.district if location else None,
            technician_names=self.technician_names(job.technicians),
            review_score=job.review.overall if job.review else None,
        )

    def customer_summary(self, record: CustomerRecord) -> CustomerSummary:
        customer = record.customer
        return CustomerSummary(
            id=str(customer.id),
            code=customer.code,
            name=customer.name,
            phone=customer.phone,
            email=customer.email,
            status=customer.status,
            customer_type=customer.customer_type,
            location_name=record.location_name or customer.name,
        )

    def technician_option(self, technician: TechnicianProfile) -> TechnicianOption:
        full_name = self.technician_display_name(technician)
        display_name = full_name
        if technician.code:
            display_name = f"{full_name} ({technician.code})"
        return TechnicianOption(
            id=str(technician.id),
            first_name=technician.first_name or "",
            last_name=technician.last_name or "",
            code=technician.code or "",
            position=technician.position or "",
            full_name=full_name,
            display_name=display_name,
        )

    # Job detail

    def timeline(self, job: Job) -> List[TimelineEvent]:
        """CREATED, persisted history oldest first, then the closing status."""
        events = [
            TimelineEvent(
                status=CREATED_STATUS, timestamp=job.created_at, by=SYSTEM_ACTOR
            )
        ]
        history = sorted(job.status_history, key=lambda event: event.created_at)
        events.extend(
            TimelineEvent(
                status=event.status,
                timestamp=event.created_at,
                by=event.created_by_name or SYSTEM_ACTOR,
            )
            for event in history
        )
        if job.is_closed:
            events.append(
                TimelineEvent(
                    status=job.status, timestamp=job.updated_at, by=SYSTEM_ACTOR
                )
            )
        return events

    def job_detail(self, job: Job) -> JobDetailData:
        location = job.location
        customer = location.customer if location else None
        coordinates = self.job_coordinates(job)
        review = job.review

        details = JobDetails(
            id=str(job.id),
            job_no=job.no,
            status=job.status,
            type=job.type,
            priority=job.priority,
            created_at=job.created_at,
            updated_at=job.updated_at,
            appointment_time=job.appointment_time,
            close_time=job.close_time,
            customer=CustomerInfo(
                name=customer.name, phone=customer.phone, email=customer.email
            )
            if customer
            else None,
            customer_contact=self.customer_contact(job),
            location=JobDetailLocation(
                name=location.name if location else None,
                province=location.province if location else None,
                district=location.district if location else None,
                address=location.address if location else None,
                contact_name=_join_name(
                    location.contact_first_name, location.contact_last_name
                )
                if location
                else "",
                contact_phone=location.contact_phone if location else None,
                coordinates=list(coordinates) if coordinates else None,
            ),
            technicians=[
                TechnicianInfo(
                    id=str(t.id),
                    name=self.technician_display_name(t),
                    code=t.code,
                    position=t.position,
                )
                for t in job.technicians
            ],
            technician_names=self.technician_names(job.technicians),
            review=ReviewInfo(
                time=review.time,
                manner=review.manner,
                knowledge=review.knowledge,
                overall=review.overall,
                recommend=review.recommend,
                comment=review.comment,
            )
            if review
            else None,
        )
        return JobDetailData(job_details=details, timeline=self.timeline(job))

    # Aggregates

    def distribution(self, groups: Sequence[GroupRow]) -> List[DistributionEntry]:
        return [DistributionEntry(id=_key(g.keys[0]), count=g.count) for g in groups]

    def counts_by_key(self, groups: Sequence[GroupRow]) -> Dict[str, int]:
        """Key to count mapping; a missing key is reported as Unknown."""
        counts: Dict[str, int] = defaultdict(int)
        for group in groups:
            key = group.keys[0]
            counts[UNKNOWN_KEY if key is None else str(key)] += group.count
        return dict(counts)

    def performance_summary(
        self, groups: Sequence[GroupRow]
    ) -> List[TechnicianPerformanceSummary]:
        summaries = []
        for group in groups:
            technician_id, first_name, last_name = group.keys
            summaries.append(
                TechnicianPerformanceSummary(
                    technician_id=str(technician_id),
                    technician_name=_join_name(first_name, last_name)
                    or NOT_AVAILABLE,
                    avg_time=group.averages.get("time"),
                    avg_manner=group.averages.get("manner"),
                    avg_knowledge=group.averages.get("knowledge"),
                    avg_overall=group.averages.get("overall"),
                    avg_recommend=group.averages.get("recommend"),
                    review_count=group.count,
                )
            )
        return summaries

    def recent_reviews(self, reviews: Iterable[CustomerReview]) -> List[RecentReview]:
        """One row per reviewed technician; reviews with no technician are skipped."""
        rows = []
        for review in reviews:
            for technician in review.technicians:
                rows.append(
                    RecentReview(
                        id=str(review.id),
                        job_no=review.job_no,
                        technician_id=str(technician.id),
                        technician_name=self.technician_display_name(technician)
                        or NOT_AVAILABLE,
                        time=review.time,
                        manner=review.manner,
                        knowledge=review.knowledge,
                        overall=review.overall,
                        recommend=review.recommend,
                        comment=review.comment,
                        created_at=review.created_at,
                    )
                )
        return rows
