"""Integration tests for snapshot precomputation and cached Overview."""

from datetime import datetime, timedelta

import pytest
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from jobinsight.application.services.cache_resolver import CacheResolver
from jobinsight.application.services.overview_aggregation import OverviewAggregation
from jobinsight.application.use_cases.get_overview import GetOverviewUseCase
from jobinsight.application.use_cases.precompute_metrics import (
    PrecomputeMetricsUseCase,
)
from jobinsight.background.tasks.precompute_metrics import run_precomputation
from jobinsight.domain.value_objects.date_window import day_window
from jobinsight.domain.value_objects.job_filter import JobFilter
from jobinsight.domain.value_objects.metric_type import MetricType
from jobinsight.infrastructure.database.executor import JoinAggregateExecutor
from jobinsight.infrastructure.database.models import MetricSnapshotModel
from jobinsight.infrastructure.database.repositories.metric_snapshot_repository import (
    MetricSnapshotRepository,
)


@pytest.fixture
def repository(db_session):
    return MetricSnapshotRepository(db_session)


@pytest.fixture
def aggregation(db_session, formatter):
    return OverviewAggregation(JoinAggregateExecutor(db_session), formatter)


@pytest.fixture
def precompute(aggregation, repository, clock, utc):
    def build(join_locations=False):
        return PrecomputeMetricsUseCase(
            aggregation,
            repository,
            utc,
            page_limit=10,
            join_locations=join_locations,
            clock=clock,
        )

    return build


@pytest.mark.integration
class TestMetricSnapshots:
    """Snapshot storage and reuse."""

    @pytest.mark.asyncio
    async def test_rerun_replaces_snapshot(
        self, precompute, repository, db_session, factory
    ):
        await factory.jobs(2, status="WORKING")

        first = await precompute().execute(MetricType.DAILY)
        await factory.job(status="COMPLETED")
        second = await precompute().execute(MetricType.DAILY)

        rows = await db_session.execute(select(func.count(MetricSnapshotModel.id)))
        assert rows.scalar_one() == 1
        assert first.date == second.date == datetime(2026, 10, 13)
        assert second.payload["metrics"]["totalJobs"] == 3
        assert second.payload["metrics"]["closedJobs"] == 1

        stored = await repository.get(MetricType.DAILY, datetime(2026, 10, 13))
        assert stored.payload["metrics"]["totalJobs"] == 3

    @pytest.mark.asyncio
    async def test_daily_and_weekly_are_separate_keys(
        self, precompute, repository, factory, fixed_now
    ):
        await factory.job(created_at=fixed_now - timedelta(days=5))

        daily = await precompute().execute(MetricType.DAILY)
        weekly = await precompute().execute(MetricType.WEEKLY)

        assert daily.payload["metrics"]["totalJobs"] == 0
        assert weekly.payload["metrics"]["totalJobs"] == 1
        assert weekly.date == datetime(2026, 10, 5)

    @pytest.mark.asyncio
    async def test_locations_skipped_gives_unknown_bucket(self, precompute, factory):
        await factory.jobs(3, location=await factory.location(province="Phuket"))

        skipped = await precompute().execute(MetricType.DAILY)
        joined = await precompute(join_locations=True).execute(MetricType.DAILY)

        assert skipped.payload["distributions"]["province"] == [
            {"_id": None, "count": 3}
        ]
        assert joined.payload["distributions"]["province"] == [
            {"_id": "Phuket", "count": 3}
        ]

    @pytest.mark.asyncio
    async def test_overview_served_from_snapshot(
        self, precompute, aggregation, repository, factory, fixed_now, clock, utc
    ):
        await factory.jobs(2)
        await precompute().execute(MetricType.DAILY)
        # Live data changes after the snapshot; the cached payload wins
        await factory.jobs(4)

        use_case = GetOverviewUseCase(
            aggregation, CacheResolver(repository, utc, clock=clock), utc, clock=clock
        )
        cached = await use_case.execute(JobFilter(window=day_window(fixed_now, utc)))
        live = await use_case.execute(JobFilter(status="WORKING"))

        assert cached.source == "precomputed"
        assert cached.data.metrics.total_jobs == 2
        assert live.source == "computed"
        assert live.data.metrics.total_jobs == 6

    @pytest.mark.asyncio
    async def test_task_entry_point_uses_session_factory(
        self, test_engine, fixed_now
    ):
        session_factory = async_sessionmaker(
            test_engine, class_=AsyncSession, expire_on_commit=False
        )

        snapshot = await run_precomputation(
            MetricType.WEEKLY, now=fixed_now, session_factory=session_factory
        )

        assert snapshot.date == datetime(2026, 10, 5)
        async with session_factory() as session:
            stored = await MetricSnapshotRepository(session).get(
                MetricType.WEEKLY, datetime(2026, 10, 5)
            )
        assert stored is not None
