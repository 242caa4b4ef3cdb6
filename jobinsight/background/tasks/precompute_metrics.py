"""
Metrics precomputation tasks.

``run_precomputation`` opens its own session and is shared by the embedded
scheduler and the Celery tasks below.
"""

import asyncio
from datetime import datetime
from typing import Optional

from celery import current_app

from jobinsight.application.services.overview_aggregation import OverviewAggregation
from jobinsight.application.services.result_formatter import ResultFormatter
from jobinsight.application.use_cases.precompute_metrics import (
    PrecomputeMetricsUseCase,
)
from jobinsight.config.database import get_async_session_factory
from jobinsight.config.logging import get_logger
from jobinsight.config.settings import settings
from jobinsight.domain.entities.metric_snapshot import MetricSnapshot
from jobinsight.domain.value_objects.metric_type import MetricType
from jobinsight.infrastructure.database.executor import JoinAggregateExecutor
from jobinsight.infrastructure.database.repositories.metric_snapshot_repository import (
    MetricSnapshotRepository,
)

logger = get_logger(__name__)


async def run_precomputation(
    metric_type: MetricType, now: Optional[datetime] = None, session_factory=None
) -> MetricSnapshot:
    """Compute and store one snapshot in a dedicated session."""
    factory = session_factory or get_async_session_factory()
    async with factory() as session:
        use_case = PrecomputeMetricsUseCase(
            aggregation=OverviewAggregation(
                JoinAggregateExecutor(session), ResultFormatter()
            ),
            snapshot_repo=MetricSnapshotRepository(session),
            tz=settings.reporting_tz,
            page_limit=settings.DEFAULT_PAGE_LIMIT,
            join_locations=settings.SNAPSHOT_JOIN_LOCATIONS,
        )
        return await use_case.execute(metric_type, now=now)


def run_async_in_new_loop(coro):
    """Run a coroutine in a fresh event loop owned by the calling task."""
    loop = asyncio.new_event_loop()
    asyncio.set_event_loop(loop)
    try:
        return loop.run_until_complete(coro)
    finally:
        loop.close()


def _run_task(metric_type: MetricType) -> dict:
    logger.info("Running precomputation task", metric_type=metric_type.value)
    try:
        snapshot = run_async_in_new_loop(run_precomputation(metric_type))
    except Exception as e:
        logger.error(
            "Precomputation task failed",
            metric_type=metric_type.value,
            error=str(e),
            exc_info=True,
        )
        return {"status": "error", "metric_type": metric_type.value, "error": str(e)}

    return {
        "status": "success",
        "metric_type": metric_type.value,
        "date": snapshot.date.isoformat(),
    }


@current_app.task(name="precompute_daily_metrics_task")
def precompute_daily_metrics_task():
    """Precompute yesterday's overview snapshot."""
    return _run_task(MetricType.DAILY)


@current_app.task(name="precompute_weekly_metrics_task")
def precompute_weekly_metrics_task():
    """Precompute last week's overview snapshot."""
    return _run_task(MetricType.WEEKLY)
