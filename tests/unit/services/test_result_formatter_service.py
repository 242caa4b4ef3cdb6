"""
Unit tests for ResultFormatter.
"""

from datetime import datetime, timedelta
from uuid import uuid4

import pytest

from jobinsight.application.interfaces.record_store import CustomerRecord, GroupRow
from jobinsight.domain.entities import (
    Customer,
    CustomerReview,
    Job,
    JobLocation,
    StatusEvent,
    TechnicianProfile,
)

CREATED = datetime(2026, 10, 1, 8, 0)
UPDATED = datetime(2026, 10, 1, 15, 30)


def make_job(**kwargs) -> Job:
    kwargs.setdefault("status", "WORKING")
    return Job(
        id=uuid4(), no="JOB-0001", created_at=CREATED, updated_at=UPDATED, **kwargs
    )


def technician(first, last, code=None) -> TechnicianProfile:
    return TechnicianProfile(id=uuid4(), first_name=first, last_name=last, code=code)


class TestTechnicianNames:
    """Technician display name rules."""

    def test_names_are_trimmed_and_joined(self, formatter):
        names = formatter.technician_names(
            [technician("Somchai", "Jaidee"), technician("Anan", None)]
        )

        assert names == "Somchai Jaidee, Anan"

    def test_nameless_technicians_contribute_nothing(self, formatter):
        names = formatter.technician_names(
            [technician(None, None), technician("", " "), technician("Malee", "C")]
        )

        assert names == "Malee C"

    def test_no_names_yields_sentinel(self, formatter):
        assert formatter.technician_names([]) == "N/A"
        assert formatter.technician_names([technician(None, "")]) == "N/A"

    def test_option_display_name_carries_code(self, formatter):
        option = formatter.technician_option(technician("Somchai", "Jaidee", "T001"))

        assert option.full_name == "Somchai Jaidee"
        assert option.display_name == "Somchai Jaidee (T001)"


class TestCustomerContact:
    """Customer contact fallback rules."""

    def test_customer_through_location_wins(self, formatter):
        customer = Customer(id=uuid4(), name="Acme", phone="02-1", email="a@x.com")
        job = make_job(
            location=JobLocation(id=uuid4(), customer=customer),
            contact_first_name="Raw",
            contact_phone="09-9",
        )

        contact = formatter.customer_contact(job)

        assert (contact.name, contact.phone, contact.email) == ("Acme", "02-1", "a@x.com")

    def test_raw_contact_used_without_customer(self, formatter):
        job = make_job(
            contact_first_name="Walk",
            contact_last_name="In",
            contact_phone="09-9",
            contact_email="walk@in.com",
        )

        contact = formatter.customer_contact(job)

        assert (contact.name, contact.phone, contact.email) == (
            "Walk In",
            "09-9",
            "walk@in.com",
        )

    def test_missing_everything_uses_defaults(self, formatter):
        contact = formatter.customer_contact(make_job())

        assert (contact.name, contact.phone, contact.email) == ("N/A", "", "")


class TestCoordinates:
    """Coordinate validity rules."""

    @pytest.mark.parametrize(
        "coordinates,expected",
        [
            ([100.5, 13.7], (100.5, 13.7)),
            ((100, 13), (100.0, 13.0)),
            ([0, 0], None),
            ([0, 13.7], (0.0, 13.7)),
            ([100.5], None),
            ([100.5, 13.7, 1], None),
            (["100.5", 13.7], None),
            ([float("nan"), 13.7], None),
            ([True, 13.7], None),
            (None, None),
        ],
    )
    def test_valid_coordinates(self, formatter, coordinates, expected):
        assert formatter.valid_coordinates(coordinates) == expected

    def test_map_points_drop_unplottable_jobs(self, formatter):
        plotted = make_job(location=JobLocation(id=uuid4(), coordinates=[100.5, 13.7]))
        unset = make_job(location=JobLocation(id=uuid4(), coordinates=[0, 0]))
        no_location = make_job()

        points = formatter.map_points([plotted, unset, no_location])

        assert [p.id for p in points] == [str(plotted.id)]
        assert (points[0].lon, points[0].lat) == (100.5, 13.7)


class TestJobRow:
    """Job row enrichment."""

    def test_bare_working_job(self, formatter):
        row = formatter.job_row(make_job(status="WORKING"))

        assert row.customer_contact.name == "N/A"
        assert row.technician_names == "N/A"
        assert row.technician_count == 0
        assert row.close_time is None
        assert row.location.coordinates is None

    @pytest.mark.parametrize("status", ["COMPLETED", "CLOSED", "CANCELLED", "REVIEW"])
    def test_close_time_set_for_closure_statuses(self, formatter, status):
        row = formatter.job_row(make_job(status=status))

        assert row.close_time == UPDATED

    @pytest.mark.parametrize("status", ["WAITINGJOB", "WORKING", "PENDING", None])
    def test_close_time_empty_for_open_statuses(self, formatter, status):
        assert formatter.job_row(make_job(status=status)).close_time is None

    def test_row_serializes_with_camel_case_keys(self, formatter):
        payload = formatter.job_row(make_job()).model_dump(by_alias=True, mode="json")

        assert payload["jobNo"] == "JOB-0001"
        assert payload["createdAt"] == "2026-10-01T08:00:00.000Z"
        assert payload["closeTime"] is None
        assert "customerContact" in payload


class TestTimeline:
    """Job detail timeline synthesis."""

    def test_open_job_timeline(self, formatter):
        job = make_job(
            status="WORKING",
            status_history=[
                StatusEvent("WORKING", CREATED + timedelta(hours=2), "Dispatcher"),
                StatusEvent("WAITINGJOB", CREATED + timedelta(hours=1)),
            ],
        )

        timeline = formatter.timeline(job)

        assert [(e.status, e.by) for e in timeline] == [
            ("CREATED", "System"),
            ("WAITINGJOB", "System"),
            ("WORKING", "Dispatcher"),
        ]
        assert timeline[0].timestamp == CREATED

    def test_closed_job_ends_with_closing_event(self, formatter):
        timeline = formatter.timeline(make_job(status="COMPLETED"))

        assert [e.status for e in timeline] == ["CREATED", "COMPLETED"]
        assert timeline[-1].timestamp == UPDATED


class TestAggregates:
    """Group row formatting."""

    def test_counts_by_key_reports_missing_key_as_unknown(self, formatter):
        counts = formatter.counts_by_key(
            [GroupRow(keys=("WORKING",), count=3), GroupRow(keys=(None,), count=2)]
        )

        assert counts == {"WORKING": 3, "Unknown": 2}

    def test_distribution_keeps_null_key(self, formatter):
        entries = formatter.distribution([GroupRow(keys=(None,), count=4)])

        assert entries[0].model_dump(by_alias=True) == {"_id": None, "count": 4}

    def test_recent_reviews_one_row_per_technician(self, formatter):
        review = CustomerReview(
            id=uuid4(),
            overall=4.0,
            job_no="JOB-0009",
            technicians=[technician("Somchai", "Jaidee"), technician("Anan", "S")],
        )
        unassigned = CustomerReview(id=uuid4(), overall=5.0)

        rows = formatter.recent_reviews([review, unassigned])

        assert [r.technician_name for r in rows] == ["Somchai Jaidee", "Anan S"]
        assert all(r.job_no == "JOB-0009" for r in rows)

    def test_customer_summary_falls_back_to_customer_name(self, formatter):
        customer = Customer(id=uuid4(), name="Acme")

        summary = formatter.customer_summary(CustomerRecord(customer=customer))

        assert summary.location_name == "Acme"
