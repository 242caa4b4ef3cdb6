"""
Unit tests for FilterNormalizer.
"""

from datetime import datetime, timedelta, timezone
from uuid import uuid4

import pytest

from jobinsight.application.services.filter_normalizer import (
    FilterNormalizer,
    RawFilterParams,
    parse_identifier,
)
from jobinsight.domain.exceptions.validation_error import InvalidIdentifierError
from jobinsight.domain.value_objects.job_filter import PageRequest, TeamLeaderMatch

BANGKOK = timezone(timedelta(hours=7))


class TestFilterNormalizer:
    """Test cases for FilterNormalizer."""

    @pytest.fixture
    def normalizer(self, clock, utc):
        return FilterNormalizer(
            tz=utc,
            default_window_days=30,
            default_limit=10,
            max_limit=10000,
            export_threshold=100,
            clock=clock,
        )

    def test_omitted_dates_default_to_trailing_thirty_days(self, normalizer, fixed_now):
        job_filter = normalizer.normalize(RawFilterParams())

        assert job_filter.window.start == fixed_now - timedelta(days=30)
        assert job_filter.window.end == fixed_now
        assert job_filter.window_defaulted is True

    def test_omitted_dates_equal_explicit_default_window(self, normalizer, fixed_now):
        omitted = normalizer.normalize(RawFilterParams())
        explicit = normalizer.normalize(
            RawFilterParams(
                start_date=(fixed_now - timedelta(days=30)).isoformat(),
                end_date=fixed_now.isoformat(),
            )
        )

        assert omitted.window == explicit.window
        assert explicit.window_defaulted is False

    def test_unparsable_date_falls_back_to_default(self, normalizer, fixed_now):
        job_filter = normalizer.normalize(
            RawFilterParams(start_date="not-a-date", end_date="2026-10-10")
        )

        assert job_filter.window.start == fixed_now - timedelta(days=30)
        assert job_filter.window.end == datetime(2026, 10, 10)

    def test_naive_dates_are_read_in_reporting_timezone(self, clock):
        normalizer = FilterNormalizer(tz=BANGKOK, clock=clock)

        job_filter = normalizer.normalize(RawFilterParams(start_date="2026-10-01"))

        assert job_filter.window.start == datetime(2026, 9, 30, 17, 0)

    def test_offset_dates_are_converted_to_utc(self, normalizer):
        job_filter = normalizer.normalize(
            RawFilterParams(start_date="2026-10-01T10:00:00+07:00")
        )

        assert job_filter.window.start == datetime(2026, 10, 1, 3, 0)

    @pytest.mark.parametrize("value", [None, "", "All", "  All  "])
    def test_all_or_missing_categorical_adds_no_predicate(self, normalizer, value):
        job_filter = normalizer.normalize(
            RawFilterParams(status=value, type=value, priority=value, province=value)
        )

        assert job_filter.status is None
        assert job_filter.type is None
        assert job_filter.priority is None
        assert job_filter.province is None
        assert not job_filter.has_categorical_filters()

    def test_categorical_values_are_kept(self, normalizer):
        job_filter = normalizer.normalize(
            RawFilterParams(status="WORKING", province="Bangkok")
        )

        assert job_filter.status == "WORKING"
        assert job_filter.province == "Bangkok"
        assert job_filter.has_categorical_filters()

    @pytest.mark.parametrize(
        "page,limit,expected",
        [
            (None, None, PageRequest(1, 10)),
            ("3", "25", PageRequest(3, 25)),
            ("abc", "-5", PageRequest(1, 10)),
            ("0", "0", PageRequest(1, 10)),
            ("2", "99999", PageRequest(2, 10000)),
        ],
    )
    def test_page_and_limit_coercion(self, normalizer, page, limit, expected):
        job_filter = normalizer.normalize(RawFilterParams(page=page, limit=limit))

        assert job_filter.page == expected

    def test_customer_listing_uses_its_own_default_limit(self, normalizer):
        job_filter = normalizer.normalize(
            RawFilterParams(), default_limit=20, with_window=False
        )

        assert job_filter.page == PageRequest(1, 20)
        assert job_filter.window is None

    def test_team_leader_splits_first_and_remaining_tokens(self, normalizer):
        job_filter = normalizer.normalize(
            RawFilterParams(team_leader="Somchai Jai Dee")
        )

        assert job_filter.team_leader == TeamLeaderMatch("Somchai", "Jai Dee")

    def test_single_token_team_leader_has_empty_last_name(self, normalizer):
        job_filter = normalizer.normalize(RawFilterParams(team_leader="Somchai"))

        assert job_filter.team_leader == TeamLeaderMatch("Somchai", "")

    def test_invalid_technician_ids_are_dropped(self, normalizer):
        valid = uuid4()

        job_filter = normalizer.normalize(
            RawFilterParams(technician_ids=f"{valid},bogus,{valid}")
        )

        assert job_filter.technician_ids == (valid,)

    def test_only_invalid_technician_ids_apply_no_constraint(self, normalizer):
        job_filter = normalizer.normalize(RawFilterParams(technician_id="bogus"))

        assert job_filter.technician_ids == ()

    def test_technician_ids_take_precedence_over_single_id(self, normalizer):
        single, multi = uuid4(), uuid4()

        job_filter = normalizer.normalize(
            RawFilterParams(technician_id=str(single), technician_ids=str(multi))
        )

        assert job_filter.technician_ids == (multi,)

    def test_search_is_trimmed(self, normalizer):
        assert normalizer.normalize(RawFilterParams(search="  acme ")).search == "acme"
        assert normalizer.normalize(RawFilterParams(search="   ")).search is None


class TestParseIdentifier:
    """Test cases for path identifier parsing."""

    def test_valid_identifier(self):
        value = uuid4()

        assert parse_identifier("jobId", str(value)) == value

    def test_malformed_identifier_raises(self):
        with pytest.raises(InvalidIdentifierError) as exc_info:
            parse_identifier("jobId", "12345")

        assert exc_info.value.field_name == "jobId"
        assert "jobId" in str(exc_info.value)
