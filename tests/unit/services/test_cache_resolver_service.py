"""
Unit tests for CacheResolver.
"""

from datetime import datetime, timedelta

import pytest

from jobinsight.application.dto import OverviewData, OverviewMetrics
from jobinsight.application.services.cache_resolver import CacheResolver
from jobinsight.domain.entities.metric_snapshot import MetricSnapshot
from jobinsight.domain.exceptions.store_error import StoreError
from jobinsight.domain.value_objects.date_window import DateWindow, day_window
from jobinsight.domain.value_objects.job_filter import JobFilter, PageRequest
from jobinsight.domain.value_objects.metric_type import MetricType

YESTERDAY = datetime(2026, 10, 13)


def make_snapshot(**overrides) -> MetricSnapshot:
    data = OverviewData(metrics=OverviewMetrics(total_jobs=7, closed_jobs=3))
    fields = dict(
        metric_type=MetricType.DAILY,
        date=YESTERDAY,
        period=DateWindow(YESTERDAY, YESTERDAY + timedelta(days=1)),
        payload=data.model_dump(by_alias=True, mode="json"),
    )
    fields.update(overrides)
    return MetricSnapshot(**fields)


class TestCacheResolver:
    """Test cases for CacheResolver."""

    @pytest.fixture
    def resolver(self, mock_snapshot_repository, clock, utc):
        return CacheResolver(mock_snapshot_repository, utc, default_limit=10, clock=clock)

    @pytest.fixture
    def today_filter(self, fixed_now, utc):
        return JobFilter(window=day_window(fixed_now, utc))

    @pytest.mark.asyncio
    async def test_serves_latest_daily_snapshot(
        self, resolver, today_filter, mock_snapshot_repository
    ):
        mock_snapshot_repository.find_latest.return_value = make_snapshot()

        cached = await resolver.resolve(today_filter)

        assert cached is not None
        assert cached.anchor == YESTERDAY
        assert cached.data.metrics.total_jobs == 7
        mock_snapshot_repository.find_latest.assert_awaited_once_with(
            MetricType.DAILY, datetime(2026, 10, 13)
        )

    @pytest.mark.asyncio
    async def test_window_ending_later_today_is_eligible(
        self, resolver, fixed_now, mock_snapshot_repository
    ):
        mock_snapshot_repository.find_latest.return_value = make_snapshot()
        job_filter = JobFilter(window=DateWindow(datetime(2026, 10, 14), fixed_now))

        assert await resolver.resolve(job_filter) is not None

    @pytest.mark.parametrize(
        "job_filter",
        [
            JobFilter(),
            JobFilter(
                window=DateWindow(datetime(2026, 10, 14), datetime(2026, 10, 15)),
                status="WORKING",
            ),
            JobFilter(
                window=DateWindow(datetime(2026, 10, 14), datetime(2026, 10, 15)),
                page=PageRequest(page=2, limit=10),
            ),
            JobFilter(
                window=DateWindow(datetime(2026, 10, 14), datetime(2026, 10, 15)),
                page=PageRequest(page=1, limit=50),
            ),
            JobFilter(
                window=DateWindow(datetime(2026, 9, 14), datetime(2026, 10, 14, 12))
            ),
        ],
        ids=["no-window", "status", "second-page", "custom-limit", "trailing-30d"],
    )
    @pytest.mark.asyncio
    async def test_ineligible_filters_bypass_cache(
        self, resolver, job_filter, mock_snapshot_repository
    ):
        assert await resolver.resolve(job_filter) is None
        mock_snapshot_repository.find_latest.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_missing_snapshot_is_a_miss(self, resolver, today_filter):
        assert await resolver.resolve(today_filter) is None

    @pytest.mark.asyncio
    async def test_store_error_falls_back_to_live(
        self, resolver, today_filter, mock_snapshot_repository
    ):
        mock_snapshot_repository.find_latest.side_effect = StoreError(
            "find_latest", "timeout"
        )

        assert await resolver.resolve(today_filter) is None

    @pytest.mark.asyncio
    async def test_outdated_schema_is_a_miss(
        self, resolver, today_filter, mock_snapshot_repository
    ):
        mock_snapshot_repository.find_latest.return_value = make_snapshot(
            schema_version=0
        )

        assert await resolver.resolve(today_filter) is None

    @pytest.mark.asyncio
    async def test_invalid_payload_is_a_miss(
        self, resolver, today_filter, mock_snapshot_repository
    ):
        mock_snapshot_repository.find_latest.return_value = make_snapshot(
            payload={"metrics": {"totalJobs": "many"}}
        )

        assert await resolver.resolve(today_filter) is None
